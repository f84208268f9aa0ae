"""Bookings app package.

This app encapsulates the booking engine: the booking aggregate, the
availability check that keeps approved and active bookings of one item
from overlapping, and the request/transition use cases exposed over
the REST API.
"""
