"""
Medication Timeline Engine

Temporal reasoning over prescribed medications: which drugs were truly
co-administered and which were a sequential therapy switch.
"""
__version__ = "1.0.0"
