"""
Uniform multi-chain request/response models.

Every chain adaptor accepts and returns these types, so callers never see
chain-specific shapes.
"""
