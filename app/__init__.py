"""Evenza announcements and notifications backend.

Kept as a regular package so ``app`` resolves to this project rather than to
an unrelated distribution with the same name.
"""
