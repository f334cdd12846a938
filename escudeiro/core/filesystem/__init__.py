"""
Filesystem
==========

Path resolution and directory listing confined to the web root.
"""
