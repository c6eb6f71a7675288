# HTTP API and upstream provider clients
