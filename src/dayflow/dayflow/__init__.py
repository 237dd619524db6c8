"""Dayflow workforce package.

Feature modules (attendance, notifications, tasks) keep their domain logic in pure
functions, with thin stateful services, MySQL repositories and Flask controllers
around them.
"""
