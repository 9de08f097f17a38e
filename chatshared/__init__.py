"""Code shared by the chat client and the single-peer chat host."""
