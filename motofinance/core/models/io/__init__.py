"""
I/O models for API requests and responses.

Each module defines the contract between the API and its clients for one
back-office page: ``*Create`` bodies validate form input, ``*Update`` bodies
carry partial updates and ``*Read`` models serialize rows (with joined
summaries where the page shows related data).
"""
