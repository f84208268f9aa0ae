"""Swaps app package.

This app encapsulates the two-party swap negotiation: proposals move
between pending and counter until one side accepts or rejects them.
"""
