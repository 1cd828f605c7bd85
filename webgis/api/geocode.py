"""Reverse geocoding proxy in front of Nominatim."""

import logging
import math
from typing import Optional, Tuple

import httpx
from litestar import Controller, get

from webgis import config
from webgis.errors import UpstreamError, ValidationError

logger = logging.getLogger("WebGIS.geocode")


def parse_coordinates(lat: Optional[str], lng: Optional[str]) -> Tuple[float, float]:
    """Parse and range-check a latitude/longitude pair."""
    try:
        lat_f = float(lat) if lat not in (None, "") else None
        lng_f = float(lng) if lng not in (None, "") else None
    except ValueError:
        raise ValidationError("lat/lng must be numbers")

    if lat_f is None or lng_f is None:
        raise ValidationError("lat/lng is required")
    if not (math.isfinite(lat_f) and math.isfinite(lng_f)):
        raise ValidationError("lat/lng must be numbers")
    if not -90.0 <= lat_f <= 90.0 or not -180.0 <= lng_f <= 180.0:
        raise ValidationError("lat/lng out of range")
    return lat_f, lng_f


def geocoder_client(**kwargs) -> httpx.AsyncClient:
    """Client for Nominatim; its usage policy requires an identifying User-Agent."""
    return httpx.AsyncClient(headers={"User-Agent": config.GEOCODER_USER_AGENT}, **kwargs)


async def reverse_geocode(lat: float, lng: float) -> dict:
    """Fetch the Nominatim reverse lookup for a point."""
    params = {
        "format": "json",
        "lat": lat,
        "lon": lng,
        "zoom": 18,
        "addressdetails": 1,
    }
    async with geocoder_client() as client:
        try:
            response = await client.get(
                config.NOMINATIM_URL,
                params=params,
                timeout=config.GEOCODER_TIMEOUT,
            )
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as e:
            logger.error(f"Geocoder HTTP error for ({lat}, {lng}): {e.response.status_code}")
            raise UpstreamError("geocoder_unavailable")
        except httpx.TimeoutException:
            logger.error(f"Timeout reverse geocoding ({lat}, {lng})")
            raise UpstreamError("geocoder_unavailable")
        except httpx.RequestError as e:
            logger.error(f"Request error reverse geocoding ({lat}, {lng}): {e}")
            raise UpstreamError("geocoder_unavailable")
        except ValueError as e:
            logger.error(f"Geocoder returned invalid JSON: {e}")
            raise UpstreamError("geocoder_unavailable")


class GeocodeController(Controller):
    """Address lookup for a clicked map location."""

    path = "/api/geocode"
    tags = ["geocode"]

    @get("/reverse")
    async def reverse(self, lat: Optional[str] = None, lng: Optional[str] = None) -> dict:
        lat_f, lng_f = parse_coordinates(lat, lng)
        data = await reverse_geocode(lat_f, lng_f)
        if not isinstance(data, dict):
            raise UpstreamError("geocoder_unavailable")

        # Nominatim answers 200 with {"error": "..."} for points over open sea.
        address = data.get("display_name")
        if address is None:
            logger.info(f"No address found for ({lat_f}, {lng_f}): {data.get('error')}")

        return {
            "ok": True,
            "address": address,
            "lat": lat_f,
            "lng": lng_f,
            "details": data.get("address") or {},
        }
