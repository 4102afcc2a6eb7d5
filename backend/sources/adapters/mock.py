"""
Mock adapter reading candidates from a local JSON file.

The file mirrors the REST payloads:
{"jobs": [...], "offers": [...], "preferences": [...]}
Eligibility is applied here, the way the backend applies it server-side.
"""

import json
from typing import Any, Dict, List, Optional

from catalog import UnknownServiceTypeError, get_service_type
from models import JobCandidate, OfferCandidate, UserPreferences
from sources.base import BaseSource


class MockSource(BaseSource):
    """Source backed by a JSON data file."""

    def _load(self) -> Dict[str, Any]:
        """
        Read the data file.

        Returns:
            Parsed file contents, empty dict on failure
        """
        try:
            with open(self.source.data_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except FileNotFoundError:
            self.logger.error(f"Mock data file not found: {self.source.data_path}")
            return {}
        except (OSError, ValueError) as e:
            self.logger.error(f"Error reading mock data from {self.source.data_path}: {e}")
            return {}

        if not isinstance(data, dict):
            self.logger.error(f"Mock data in {self.source.data_path} is not a JSON object")
            return {}
        return data

    def fetch_jobs(self, worker_level: int = 1) -> List[JobCandidate]:
        """
        Open jobs whose service type the worker's level allows.

        Returns:
            List of JobCandidate objects, empty list on failure
        """
        jobs = self._parse_records(self._load().get('jobs', []), JobCandidate.from_dict, "job")

        eligible = []
        for job in jobs:
            if job.status != 'open':
                continue
            try:
                service_type = get_service_type(job.service_type_id)
            except UnknownServiceTypeError as e:
                self.logger.warning(f"Skipping job {job.id}: {e}")
                continue
            if worker_level >= service_type.min_level:
                eligible.append(job)

        self.logger.info(f"Fetched {len(eligible)} open jobs from mock data")
        return eligible[:self.source.limit]

    def fetch_offers(self) -> List[OfferCandidate]:
        offers = self._parse_records(
            self._load().get('offers', []), OfferCandidate.from_dict, "offer"
        )
        public = [o for o in offers if o.visibility == 'public' and o.status == 'active']
        self.logger.info(f"Fetched {len(public)} public offers from mock data")
        return public

    def fetch_preferences(self, user_id: str) -> Optional[UserPreferences]:
        for record in self._load().get('preferences', []):
            if isinstance(record, dict) and str(record.get('userId')) == user_id:
                try:
                    return UserPreferences.from_dict(record)
                except (TypeError, ValueError) as e:
                    self.logger.warning(f"Invalid preferences for user {user_id}: {e}")
                    return None
        return None
