"""
PassKeeper Password Manager

Keeps website credentials in memory for the duration of one session.
Nothing is written to disk or sent over the network.
"""
