"""
Core Package.

Contains the result models shared by the verifier and the CLI.
"""
