# Realtime push channel
