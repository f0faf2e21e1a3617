"""
Presets du panneau de propriétés : polices, couleurs, lien Google Fonts épinglé.
"""

FONT_PRESETS = [
    {"name": "Inter",             "value": "Inter, sans-serif"},
    {"name": "Montserrat",        "value": "Montserrat, sans-serif"},
    {"name": "Roboto",            "value": "Roboto, sans-serif"},
    {"name": "Open Sans",         "value": "Open Sans, sans-serif"},
    {"name": "Poppins",           "value": "Poppins, sans-serif"},
    {"name": "Playfair Display",  "value": "Playfair Display, serif"},
    {"name": "Merriweather",      "value": "Merriweather, serif"},
    {"name": "Lora",              "value": "Lora, serif"},
    {"name": "Space Grotesk",     "value": "Space Grotesk, sans-serif"},
    {"name": "JetBrains Mono",    "value": "JetBrains Mono, monospace"},
    {"name": "Fira Code",         "value": "Fira Code, monospace"},
    {"name": "IBM Plex Sans",     "value": "IBM Plex Sans, sans-serif"},
    {"name": "DM Sans",           "value": "DM Sans, sans-serif"},
    {"name": "Plus Jakarta Sans", "value": "Plus Jakarta Sans, sans-serif"},
]

COLOR_PRESETS = [
    "#000000", "#ffffff", "#ef4444", "#f97316", "#f59e0b", "#eab308",
    "#84cc16", "#22c55e", "#10b981", "#14b8a6", "#06b6d4", "#0ea5e9",
    "#3b82f6", "#6366f1", "#8b5cf6", "#a855f7", "#d946ef", "#ec4899",
]

METALLIC_COLORS = [
    {"name": "Gold",         "value": "#D4AF37"},
    {"name": "Light Gold",   "value": "#FFD700"},
    {"name": "Rose Gold",    "value": "#B76E79"},
    {"name": "Bronze",       "value": "#CD7F32"},
    {"name": "Silver",       "value": "#C0C0C0"},
    {"name": "Light Silver", "value": "#E8E8E8"},
    {"name": "Platinum",     "value": "#E5E4E2"},
    {"name": "Chrome",       "value": "#AAA9AD"},
]

# Lien épinglé : l'export doit rester identique d'un build à l'autre
GOOGLE_FONTS_URL = (
    "https://fonts.googleapis.com/css2?family=Inter:wght@400;500;600;700"
    "&family=Montserrat:wght@600;700;800&display=swap"
)

SELECTION_OUTLINE = "#3b82f6"


def presets() -> dict:
    """Bloc de presets exposé au catalogue du builder."""
    return {
        "fonts": FONT_PRESETS,
        "colors": COLOR_PRESETS,
        "metallic_colors": METALLIC_COLORS,
    }
