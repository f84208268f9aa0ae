"""Items app package: the listings that bookings and swaps refer to."""
