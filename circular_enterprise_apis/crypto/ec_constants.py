"""
Constants for elliptic curve cryptography.
"""

# SECP256K1 constants
# Order of the SECP256K1 elliptic curve (N value)
SECP256K1_N = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141

# Half order, the upper bound of a canonical (low-S) signature
SECP256K1_HALF_N = SECP256K1_N >> 1

# Valid private scalars lie in [1, N-1]
SECP256K1_MIN = 1
SECP256K1_MAX = SECP256K1_N - 1

# Byte length of a scalar and of one affine coordinate
SECP256K1_SCALAR_BYTES = 32
