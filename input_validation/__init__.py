"""
Input Validation App

Validate request input before business logic runs: every check appends to a
shared error list, and the controller answers HTTP 400 with that list
instead of proceeding when it is non-empty.
"""
