"""
Core domain models, mathematical primitives, and contracts.

This module contains the foundational building blocks that are independent
of the UI layer and of the suggestion transport.
"""
