"""Background services around the HMI status engine (state loading, refresh loop)."""
