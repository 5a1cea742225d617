"""HTTPS availability check."""

import logging

from leadscan.integrations.http_client import PageFetcher
from leadscan.models.assessment import AssessmentRecord, CheckOutcome

logger = logging.getLogger(__name__)

INSECURE_PENALTY = 10


async def check_insecure(
    record: AssessmentRecord,
    fetcher: PageFetcher,
    timeout: float = 5.0,
) -> CheckOutcome:
    """Probe ``https://domain`` then ``https://www.domain``.

    The site counts as secure when either answers with a 2xx status.
    """
    domain = record.domain
    secure = False
    for candidate in (f"https://{domain}", f"https://www.{domain}"):
        if await fetcher.fetch(candidate, timeout=timeout) is not None:
            secure = True
            break
        logger.debug("No HTTPS response from %s", candidate)

    if secure:
        return CheckOutcome("insecure", passed=True, fields={"insecure_site": False})
    logger.info("%s does not serve HTTPS", domain)
    return CheckOutcome("insecure", passed=False, fields={"insecure_site": True}, delta=INSECURE_PENALTY)
