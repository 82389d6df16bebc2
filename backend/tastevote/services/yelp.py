"""Restaurant provider backed by the Yelp Fusion API.

Follows the Flask extension pattern: instantiate once at import time and bind
to an application with `init_app`.
"""

from typing import Any, Dict, List, Optional
import logging

import httpx

from tastevote.exceptions import ProviderError
from tastevote.models import Candidate


logger = logging.getLogger(__name__)


class YelpClient:
    def __init__(self, app=None):
        self._http: Optional[httpx.Client] = None
        self.search_limit = 10
        if app is not None:
            self.init_app(app)

    def init_app(self, app) -> None:
        cfg = app.config
        if not cfg.get('YELP_API_KEY'):
            app.logger.warning("YELP_API_KEY is not set; provider calls will be rejected by Yelp")
        if self._http is not None:
            self._http.close()
        self._http = httpx.Client(
            base_url=cfg.get('YELP_API_URL', 'https://api.yelp.com/v3'),
            headers={'Authorization': f"Bearer {cfg.get('YELP_API_KEY', '')}"},
            timeout=float(cfg.get('YELP_TIMEOUT_SEC', 10)),
            transport=cfg.get('YELP_HTTP_TRANSPORT'),
        )
        self.search_limit = int(cfg.get('YELP_SEARCH_LIMIT', 10))
        app.extensions['yelp'] = self

    def _get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        if self._http is None:
            raise ProviderError('Restaurant provider is not configured')
        try:
            resp = self._http.get(path, params=params)
            resp.raise_for_status()
            return resp.json()
        except httpx.HTTPStatusError as exc:
            logger.warning("[yelp] %s -> %s", path, exc.response.status_code)
            raise ProviderError(f"Yelp returned {exc.response.status_code} for {path}") from exc
        except httpx.HTTPError as exc:
            logger.warning("[yelp] %s failed: %s", path, exc)
            raise ProviderError(f"Could not reach Yelp: {exc}") from exc
        except ValueError as exc:
            raise ProviderError(f"Yelp sent invalid JSON for {path}") from exc

    def search(self, term: Optional[str], latitude, longitude, limit: Optional[int] = None) -> List[Candidate]:
        """Candidate restaurants near a location, in Yelp's ranking order."""
        params = {
            'latitude': latitude,
            'longitude': longitude,
            'limit': limit or self.search_limit,
        }
        if term:
            params['term'] = term
        data = self._get('/businesses/search', params)
        return [Candidate.from_business(b) for b in data.get('businesses') or [] if b.get('id')]

    def business(self, business_id: str) -> Dict[str, Any]:
        return self._get(f'/businesses/{business_id}')

    def reviews(self, business_id: str) -> List[Dict[str, Any]]:
        return self._get(f'/businesses/{business_id}/reviews').get('reviews', [])

    def autocomplete(self, text: str) -> List[Dict[str, Any]]:
        return self._get('/autocomplete', {'text': text}).get('terms', [])
