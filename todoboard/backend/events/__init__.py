# Change notification: broadcast hub, event schemas, publisher
