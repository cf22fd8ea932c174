"""Salon Booking API: accounts, authentication and role-based access."""
