"""Domain enums and API I/O models shared by the services and the server."""
