"""Gradewise package.

Organized by feature modules (students, attendance, ratings, recap, ...)
with a thin Flask controller layer on top of service/repository layers.
"""
