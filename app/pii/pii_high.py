from app.pii.pii_base import Pii


class PiiSsn(Pii):
    """
    Social Security Number.  Defaults to HIGH impact, so it is always redacted when rendered.
    """
