"""Status server for a chat system: least-loaded chat server assignment, login tokens in Redis, and pooled RPC clients."""

__version__ = "0.1.0"