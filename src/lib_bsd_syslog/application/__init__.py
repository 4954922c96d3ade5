"""Application layer: ports consumed by the syslog adapters."""
