"""
Built-in catalog used when neither a shared link nor saved state is present.
"""

from typing import Any, Dict, List


DEFAULT_PRODUCTS: List[Dict[str, Any]] = [
    {
        "id": "multi_coverage",
        "icon": "📋",
        "title": "Porsche Multi-Coverage",
        "subtitle": "Porsche Financial Services",
        "description": (
            "Platinum Coverage: Tire & Wheel, Ding & Dent, Windshield, Key Replacement. "
            "Comprehensive protection for your vehicle."
        ),
        "price": 5344,
        "link": "https://www.porsche.com/",
    },
    {
        "id": "lease_end",
        "icon": "🔒",
        "title": "Lease-End Protection",
        "subtitle": "Porsche Protection Plan",
        "description": (
            "Help minimize unexpected lease-end charges with coverage designed "
            "for common excess wear items."
        ),
        "price": 1994,
        "link": "https://www.porsche.com/",
    },
    {
        "id": "term_coverage",
        "icon": "🛡️",
        "title": "Term Coverage Plus",
        "subtitle": "Porsche Financial Services",
        "description": "Optional coverage for extra peace of mind and predictable ownership costs.",
        "price": 3878,
        "link": "https://www.porsche.com/",
    },
    {
        "id": "xpel",
        "icon": "⚡",
        "title": "XPEL Surface Protection",
        "subtitle": "Ultimate Paint Protection",
        "description": (
            "Protects your vehicle's finish and resale value with premium film "
            "and surface protection options."
        ),
        "price": 2495,
        "link": "https://www.xpel.com/",
    },
    {
        "id": "surface",
        "icon": "✨",
        "title": "Surface Protection",
        "subtitle": "Cilajet Ultimate",
        "description": "Protects paint surfaces from sun, weather, oxidation, and loss of gloss.",
        "price": 1995,
        "link": "https://www.cilajet.com/",
    },
    {
        "id": "vehicle_service",
        "icon": "🔧",
        "title": "Vehicle Service Protection",
        "subtitle": "Porsche Financial Services",
        "description": (
            "Nationwide service at authorized dealers plus roadside assistance "
            "and trip interruption coverage."
        ),
        "price": 3805,
        "link": "https://www.porsche.com/",
    },
    {
        "id": "dent",
        "icon": "☂️",
        "title": "Dent Protection",
        "subtitle": "Porsche Financial Services",
        "description": "Repairs dents and dings from everyday use without harming the factory finish.",
        "price": 630,
        "link": "https://www.porsche.com/",
    },
    {
        "id": "tire_wheel",
        "icon": "⚙️",
        "title": "Tire & Wheel Protection",
        "subtitle": "Porsche Financial Services",
        "description": (
            "Repair or replacement protection for tires and wheels damaged by "
            "common road hazards."
        ),
        "price": 1850,
        "link": "https://www.porsche.com/",
    },
]

DEFAULT_PACKAGES: List[Dict[str, Any]] = [
    {
        "id": "appearance",
        "name": "Appearance Package",
        "description": "Paint film, surface sealant and dent repair together.",
        "icon": "✨",
        "productIds": ["xpel", "surface", "dent"],
        "discount": 10,
        "color": "#b08d57",
    },
    {
        "id": "ownership",
        "name": "Worry-Free Ownership",
        "description": "Service, tire & wheel and term coverage for the life of the loan.",
        "icon": "🛡️",
        "productIds": ["vehicle_service", "tire_wheel", "term_coverage"],
        "discount": 15,
        "color": "#1f3a5f",
    },
]
