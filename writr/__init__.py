"""
writr
-----
Local-first creative-writing toolkit: project storage plus the backup and
restore engine that moves whole project graphs in and out of the store.
"""

__version__ = "0.1.0"
