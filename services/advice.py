"""
Advice orchestration: cache first, then Gemini, then a fallback or an error.

Each cached category has its own LRUCache (see utils.cache.CacheRegistry).
Cache reads happen before the AI await and cache writes after it, so no lock
is held while the request is in flight. Degraded results are never cached.
"""

from collections.abc import Mapping, Sequence
from typing import Any

from services import prompts
from services.exceptions import AdviceUnavailableError, AIResponseError, AIServiceError
from services.gemini import ImageInput
from services.offline_tips import offline_tips
from services.tariffs import get_peak_sun_hours, get_seasonal_rate
from utils.cache import CacheRegistry, LRUCache, derive_key
from utils.helpers import parse_json_object
from utils.logger import logger


def _require_items(result: dict[str, Any], field: str, key: str) -> dict[str, Any]:
    """Check ``result[field]`` is a list of objects that each carry a non-empty ``key``."""
    items = result.get(field)
    if not isinstance(items, list):
        raise AIResponseError(f"AI response has no '{field}' list")
    for item in items:
        if not isinstance(item, Mapping) or not str(item.get(key) or "").strip():
            raise AIResponseError(f"AI response '{field}' entry without '{key}': {item!r:.80}")
    return result


class AdviceService:
    """
    Produces AI advice for device lists.

    Args:
        ai: Object with ``async generate(prompt, image=None) -> str``
        caches: Per-category caches
    """

    def __init__(self, ai, caches: CacheRegistry) -> None:
        self.ai = ai
        self.caches = caches

    async def _generate_json(self, prompt: str, image: ImageInput | None = None) -> dict[str, Any]:
        """Single AI call; every failure comes out as AIServiceError."""
        try:
            text = await self.ai.generate(prompt, image)
        except AIServiceError:
            raise
        except Exception as e:
            raise AIServiceError(f"AI call failed: {e}") from e
        return parse_json_object(text)

    @staticmethod
    def _cached(cache: LRUCache, key: str, category: str) -> dict[str, Any] | None:
        cached = cache.get(key)
        if cached is None:
            return None
        logger.info(f"{category} served from cache ({key})")
        return {**cached, "cached": True}

    # ============== TIPS ==============

    async def get_tips(
        self,
        devices: Sequence[Any],
        context: Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        """
        Energy-saving tips for a device list. Never raises on AI failure.

        Returns the cached result (marked ``cached``), a fresh AI result, or
        the offline tips (marked ``offline``) when the AI call fails.
        """
        key = derive_key(devices)
        cached = self._cached(self.caches.tips, key, "Tips")
        if cached is not None:
            return cached

        try:
            result = _require_items(
                await self._generate_json(prompts.tips_prompt(devices, context)),
                "tips",
                "title",
            )
        except AIServiceError as e:
            logger.warning(f"Tips generation failed, using offline fallback: {e}")
            return offline_tips(devices)

        self.caches.tips.set(key, result)
        return dict(result)

    # ============== HABITS ==============

    async def get_habits(self, devices: Sequence[Any]) -> dict[str, Any]:
        """
        Personalized daily habits.

        Raises:
            AdviceUnavailableError: AI call or parsing failed
        """
        key = f"habits_{derive_key(devices)}"
        cached = self._cached(self.caches.habits, key, "Habits")
        if cached is not None:
            return cached

        try:
            result = _require_items(
                await self._generate_json(prompts.habits_prompt(devices)),
                "habits",
                "title",
            )
        except AIServiceError as e:
            logger.error(f"Habits generation failed: {e}")
            raise AdviceUnavailableError("habits", str(e)) from e

        self.caches.habits.set(key, result)
        return dict(result)

    # ============== COMPLETENESS ==============

    async def check_completeness(self, devices: Sequence[Any]) -> dict[str, Any]:
        """Likely missing appliances; ``{"missing_items": []}`` when the AI fails."""
        key = f"completeness_{derive_key(devices)}"
        cached = self._cached(self.caches.completeness, key, "Completeness")
        if cached is not None:
            return cached

        try:
            result = _require_items(
                await self._generate_json(prompts.completeness_prompt(devices)),
                "missing_items",
                "name",
            )
        except AIServiceError as e:
            logger.warning(f"Completeness check failed, assuming nothing missing: {e}")
            return {"missing_items": []}

        self.caches.completeness.set(key, result)
        return dict(result)

    # ============== INTERVIEW ==============

    async def interview(self, devices: Sequence[Any]) -> dict[str, Any] | None:
        """
        One follow-up question about a missing appliance.

        Returns None when the inventory is complete or the AI fails.
        """
        try:
            text = await self.ai.generate(prompts.interview_prompt(devices), None)
        except Exception as e:
            logger.warning(f"Interview generation failed: {e}")
            return None

        if not text or text.strip().strip("`").strip().lower() in ("", "null"):
            return None

        try:
            result = parse_json_object(text)
        except AIResponseError as e:
            logger.warning(f"Interview response unusable: {e}")
            return None

        if not result.get("question"):
            return None
        return result

    # ============== ONBOARDING ==============

    async def onboarding_question(
        self,
        profile: Mapping[str, Any],
        devices: Sequence[Any],
    ) -> dict[str, Any]:
        """
        Next onboarding question for a household profile.

        Raises:
            AdviceUnavailableError: AI call or parsing failed
        """
        try:
            return await self._generate_json(prompts.onboarding_prompt(profile, devices))
        except AIServiceError as e:
            logger.error(f"Onboarding question failed: {e}")
            raise AdviceUnavailableError("onboarding", str(e)) from e

    # ============== SOLAR QUOTES ==============

    async def solar_quotes(
        self,
        devices: Sequence[Any],
        location: str | None = None,
        province: str | None = None,
        monthly_spend: float | None = None,
    ) -> dict[str, Any]:
        """
        Three solar/backup packages sized for the devices and local tariff.

        Cached per municipality and device list.

        Raises:
            AdviceUnavailableError: AI call or parsing failed
        """
        tariff = get_seasonal_rate(location or province)
        peak_sun_hours = get_peak_sun_hours(province)

        key = f"solar_{tariff['municipality']}_{derive_key(devices)}"
        cached = self._cached(self.caches.solar, key, "Solar quotes")
        if cached is not None:
            return cached

        prompt = prompts.solar_quotes_prompt(devices, tariff, peak_sun_hours, monthly_spend)
        try:
            packages = _require_items(await self._generate_json(prompt), "packages", "tier")
        except AIServiceError as e:
            logger.error(f"Solar quote generation failed: {e}")
            raise AdviceUnavailableError("solar-quotes", str(e)) from e

        result = {
            **packages,
            "tariff": {
                "municipality": tariff["municipality"],
                "rate": tariff["rate"],
                "seasonal_rate": tariff["seasonal_rate"],
                "season": tariff["season"],
                "is_ibt": tariff["is_ibt"],
            },
            "peak_sun_hours": peak_sun_hours,
        }
        self.caches.solar.set(key, result)
        return dict(result)

    # ============== DEVICE SCAN ==============

    async def scan_device(self, image: ImageInput) -> dict[str, Any]:
        """
        Identify a device and its wattage from a photo.

        Raises:
            AdviceUnavailableError: AI call or parsing failed
        """
        try:
            result = await self._generate_json(prompts.device_scan_prompt(), image)
        except AIServiceError as e:
            logger.error(f"Device scan failed: {e}")
            raise AdviceUnavailableError("scan", str(e)) from e

        if not result.get("name"):
            raise AdviceUnavailableError("scan", "device not identified")
        return result
