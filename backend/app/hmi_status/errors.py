"""HMI Status — error types."""


class ConfigurationError(ValueError):
    """Structural configuration problem (bad envelope, unknown channel, bad mapping).

    Raised at configuration load time. Per-reading anomalies never raise.
    """
