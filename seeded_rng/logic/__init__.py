"""Generator implementations and their shared contract."""
