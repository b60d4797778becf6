"""
API server package — HTTP interface over the chain dispatcher.

One POST route per account operation; typed adaptor errors are turned into
error-coded payloads here and nowhere else.
"""
