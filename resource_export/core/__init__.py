"""Core infrastructure: settings, database engines, storage disks, errors."""
