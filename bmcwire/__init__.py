"""IPMI v2.0 and DCMI wire formats, RAKP session cryptography, AES-128-CBC and a UDP transport for BMCs."""

__version__ = "0.1.0"