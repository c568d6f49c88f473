from __future__ import annotations

from typing import Any

# Demo catalog for the memory/json stores. Ids are stable so the API can be tried by hand.
CATALOG_SEED: dict[str, list[dict[str, Any]]] = {
    "services": [
        {
            "id": "chibi",
            "title": "Chibi",
            "category": "personajes",
            "description": "Personaje estilo chibi de cuerpo completo.",
            "image": "",
            "price_clp_min": 10000,
            "price_clp_max": 18000,
            "price_usd_min": 12,
            "price_usd_max": 20,
            "is_available": True,
            "order_index": 0,
        },
        {
            "id": "icon",
            "title": "Icon",
            "category": "retratos",
            "description": "Retrato de busto para perfil.",
            "image": "",
            "price_clp_min": 15000,
            "price_clp_max": 30000,
            "price_usd_min": 18,
            "price_usd_max": 35,
            "is_available": True,
            "order_index": 1,
        },
        {
            "id": "pack-emotes",
            "title": "Pack de Emotes",
            "category": "emotes",
            "description": "Emotes para Twitch o Discord, personalizables uno a uno.",
            "image": "",
            "price_clp_min": 25000,
            "price_clp_max": 60000,
            "price_usd_min": 30,
            "price_usd_max": 70,
            "is_available": True,
            "order_index": 2,
            "is_multi_unit_pack": True,
            "default_unit_count": 5,
        },
    ],
    "service_detail_levels": [
        {"id": "icon-simple", "service_id": "icon", "level_name": "simple", "level_label": "Simple",
         "price_clp": 15000, "price_usd": 18, "order_index": 0, "is_available": True},
        {"id": "icon-premium", "service_id": "icon", "level_name": "premium", "level_label": "Premium",
         "price_clp": 30000, "price_usd": 35, "order_index": 1, "is_available": True},
        {"id": "emotes-simple", "service_id": "pack-emotes", "level_name": "simple", "level_label": "Simple",
         "price_clp": 25000, "price_usd": 30, "order_index": 0, "is_available": True},
        {"id": "emotes-detallado", "service_id": "pack-emotes", "level_name": "detallado",
         "level_label": "Detallado", "price_clp": 35000, "price_usd": 40, "order_index": 1, "is_available": True},
    ],
    "service_variants": [
        {"id": "icon-frame", "service_id": "icon", "variant_name": "profile-frame", "variant_label": "Marco de perfil",
         "price_clp": 5000, "price_usd": 5, "order_index": 0, "is_available": True},
        {"id": "emotes-5", "service_id": "pack-emotes", "variant_name": "pack-5", "variant_label": "5 emotes",
         "price_clp": 0, "price_usd": 0, "order_index": 0, "is_available": True},
        {"id": "emotes-7", "service_id": "pack-emotes", "variant_name": "pack-7", "variant_label": "7 emotes",
         "price_clp": 10000, "price_usd": 12, "order_index": 1, "is_available": True},
        {"id": "emotes-10", "service_id": "pack-emotes", "variant_name": "pack-10", "variant_label": "10 emotes",
         "price_clp": 20000, "price_usd": 24, "order_index": 2, "is_available": True},
    ],
    "extras": [
        {"id": "background", "title": "Fondo", "description": "Fondo ilustrado simple.", "icon": "🖼️",
         "price_clp": 2000, "price_usd": 3, "only_for": [], "is_available": True, "order_index": 0},
        {"id": "extra-character", "title": "Personaje extra", "description": "Un personaje adicional.",
         "icon": "👥", "price_clp": 8000, "price_usd": 10, "only_for": ["chibi", "icon"],
         "is_available": True, "order_index": 1},
        {"id": "sparkle", "title": "Brillos animados", "description": "Brillos para el emote.", "icon": "✨",
         "price_clp": 1500, "price_usd": 2, "only_for": ["pack-emotes"], "is_available": True, "order_index": 2},
    ],
    "commission_themes": [
        {"id": "navidad", "name": "Navidad", "icon": "🎄", "is_available": True, "order_index": 0},
        {"id": "halloween", "name": "Halloween", "icon": "🎃", "is_available": True, "order_index": 1},
    ],
    "emote_config": [
        {"id": "emote-1", "service_id": "pack-emotes", "emote_number": 1, "custom_label": "Saludo",
         "description": "Personaje saludando.", "is_active": True, "order_index": 0},
        {"id": "emote-2", "service_id": "pack-emotes", "emote_number": 2, "custom_label": "Corazon",
         "description": None, "is_active": True, "order_index": 1},
    ],
    "emote_extra_availability": [
        {"id": "sparkle-3", "extra_id": "sparkle", "emote_number": 3, "is_available": False},
    ],
    "rules": [
        {"id": "rule-fanart", "text": "Fanart y OCs", "is_allowed": True, "icon": "✅", "order_index": 0},
        {"id": "rule-nsfw", "text": "NSFW", "is_allowed": False, "icon": "❌", "order_index": 1},
        {"id": "rule-gore", "text": "Gore", "is_allowed": False, "icon": "❌", "order_index": 2},
    ],
    "site_settings": [
        {"id": "announcement", "key": "announcement_message", "value": "Comisiones abiertas!", "is_active": True},
    ],
    "gallery": [],
    "testimonials": [],
}
