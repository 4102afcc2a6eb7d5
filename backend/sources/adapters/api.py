"""
API adapter for the LidaCacau REST backend.

The backend filters jobs by status and worker level; ranking happens locally.
"""

import requests
from typing import Any, Dict, List, Optional
from models import JobCandidate, OfferCandidate, UserPreferences
from sources.base import BaseSource

USER_AGENT = 'LidaCacauFeed/1.0'


class ApiSource(BaseSource):
    """Source backed by the REST backend."""

    def _get(self, path: str, params: Optional[Dict[str, Any]] = None) -> requests.Response:
        if not self.source.base_url:
            raise ValueError("source.base_url is required for the api adapter")
        response = requests.get(
            self.source.base_url.rstrip('/') + path,
            params=params,
            timeout=self.source.timeout,
            headers={'User-Agent': USER_AGENT, 'Accept': 'application/json'}
        )
        response.raise_for_status()
        return response

    def fetch_jobs(self, worker_level: int = 1) -> List[JobCandidate]:
        """
        Fetch open jobs from GET /jobs.

        Returns:
            List of JobCandidate objects, empty list on failure
        """
        try:
            data = self._get('/jobs', {
                'status': 'open',
                'limit': self.source.limit,
                'workerLevel': worker_level,
            }).json()
            records = data.get('jobs', []) if isinstance(data, dict) else data
            jobs = self._parse_records(records or [], JobCandidate.from_dict, "job")
            self.logger.info(f"Fetched {len(jobs)} jobs from {self.source.base_url}")
            return jobs

        except requests.exceptions.Timeout:
            self.logger.error(f"Timeout fetching jobs from {self.source.base_url}")
            return []
        except requests.exceptions.RequestException as e:
            self.logger.error(f"Request error fetching jobs from {self.source.base_url}: {e}")
            return []
        except (KeyError, ValueError) as e:
            self.logger.error(f"Error parsing jobs response from {self.source.base_url}: {e}")
            return []

    def fetch_offers(self) -> List[OfferCandidate]:
        """
        Fetch public offers from GET /offers.

        Returns:
            List of OfferCandidate objects, empty list on failure
        """
        try:
            data = self._get('/offers', {'visibility': 'public'}).json()
            records = data.get('offers', []) if isinstance(data, dict) else data
            offers = self._parse_records(records or [], OfferCandidate.from_dict, "offer")
            offers = [o for o in offers if o.status == 'active']
            self.logger.info(f"Fetched {len(offers)} offers from {self.source.base_url}")
            return offers

        except requests.exceptions.Timeout:
            self.logger.error(f"Timeout fetching offers from {self.source.base_url}")
            return []
        except requests.exceptions.RequestException as e:
            self.logger.error(f"Request error fetching offers from {self.source.base_url}: {e}")
            return []
        except (KeyError, ValueError) as e:
            self.logger.error(f"Error parsing offers response from {self.source.base_url}: {e}")
            return []

    def fetch_preferences(self, user_id: str) -> Optional[UserPreferences]:
        """
        Fetch preferences from GET /users/{id}/preferences.

        Returns:
            UserPreferences, None if the user has none (404) or on failure
        """
        try:
            data = self._get(f'/users/{user_id}/preferences').json()
            if isinstance(data, dict) and 'preferences' in data:
                data = data['preferences']
            if not data:
                return None
            return UserPreferences.from_dict(data)

        except requests.exceptions.HTTPError as e:
            if e.response is not None and e.response.status_code == 404:
                return None
            self.logger.error(f"HTTP error fetching preferences for {user_id}: {e}")
            return None
        except requests.exceptions.RequestException as e:
            self.logger.error(f"Request error fetching preferences for {user_id}: {e}")
            return None
        except (AttributeError, TypeError, ValueError) as e:
            self.logger.error(f"Error parsing preferences for {user_id}: {e}")
            return None
