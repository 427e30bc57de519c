# HTTP and WebSocket routers
