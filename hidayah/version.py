# hidayah/version.py
VERSION = "1.0.0"
