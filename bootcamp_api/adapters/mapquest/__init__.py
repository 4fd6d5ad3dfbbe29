"""MapQuest adapter for address geocoding."""

from bootcamp_api.adapters.mapquest.geocoder import MapQuestGeocoder

__all__ = ["MapQuestGeocoder"]
