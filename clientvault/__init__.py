"""
ClientVault
Copyright (c) 2025

THREAT MODEL:
All records are kept on this device only, encrypted with a key derived from a
secret embedded in the application. This hides data from casual inspection of
the store file; it is not protection against anyone who has the application
code. Plain JSON exports are not encrypted at all.
"""
