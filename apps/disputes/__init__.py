"""Disputes app package: booking disputes escalated to administrators."""
