"""Default implementations of the external capabilities the pipeline consumes."""
