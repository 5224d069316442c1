import logging

import requests

logger = logging.getLogger(__name__)


class DevServerProber:
    """Checks once whether the Vite dev server answers, then remembers the answer.

    The result is never refreshed for the lifetime of the prober. A helper is
    meant to live for one request, so a dev server started or stopped
    mid-request is only noticed by the next helper.
    """

    def __init__(self, url: str, timeout: float, session: requests.Session | None = None):
        self.url = url
        self.timeout = timeout
        self.session = session
        self._is_live: bool | None = None

    def is_dev_server_live(self) -> bool:
        if self._is_live is not None:
            return self._is_live

        self._is_live = self._probe()
        return self._is_live

    def _probe(self) -> bool:
        get = self.session.get if self.session is not None else requests.get
        try:
            response = get(
                self.url,
                timeout=self.timeout,
                headers={"Accept": "application/json"},
            )
        except (requests.RequestException, ValueError) as e:
            logger.debug("Dev server %s not reachable: %s", self.url, e)
            return False

        if response.status_code != 200:
            logger.debug("Dev server %s answered HTTP %s", self.url, response.status_code)
            return False

        logger.debug("Dev server %s is live", self.url)
        return True
