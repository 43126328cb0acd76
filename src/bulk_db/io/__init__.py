"""
I/O layer: connection adapters and the bulk operators that write through them.
"""
