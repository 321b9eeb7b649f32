"""Core story primitives (events and the parsed story type).

Kept free of terminal concerns so it can be reused by the parser, the engine, and tests.
"""
