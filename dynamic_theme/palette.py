"""Lookup tables shared by the extraction strategies."""

import re

# Approximate utility-class shades, hue -> shade -> hex
SHADE_TABLE = {
    "blue": {400: "#3B82F6", 500: "#3B82F6", 600: "#2563EB", 700: "#1D4ED8"},
    "red": {400: "#F87171", 500: "#EF4444", 600: "#DC2626", 700: "#B91C1C"},
    "green": {400: "#4ADE80", 500: "#22C55E", 600: "#16A34A", 700: "#15803D"},
    "yellow": {400: "#FACC15", 500: "#EAB308", 600: "#CA8A04", 700: "#A16207"},
    "purple": {400: "#C084FC", 500: "#A855F7", 600: "#9333EA", 700: "#7E22CE"},
    "pink": {400: "#F472B6", 500: "#EC4899", 600: "#DB2777", 700: "#BE185D"},
    "indigo": {400: "#818CF8", 500: "#6366F1", 600: "#4F46E5", 700: "#4338CA"},
    "teal": {400: "#2DD4BF", 500: "#14B8A6", 600: "#0D9488", 700: "#0F766E"},
    "orange": {400: "#FB923C", 500: "#F97316", 600: "#EA580C", 700: "#C2410C"},
    "cyan": {400: "#22D3EE", 500: "#06B6D4", 600: "#0891B2", 700: "#0E7490"},
}

_HUES = "|".join(SHADE_TABLE)
BACKGROUND_SHADE_RE = re.compile(rf'^bg-({_HUES})-(400|500|600|700)$')
TEXT_SHADE_RE = re.compile(rf'^text-({_HUES})-(400|500|600|700)$')

# Color words that sometimes appear in logo file names
FILENAME_COLORS = [
    ("blue", "#1a73e8"),
    ("red", "#ea4335"),
    ("green", "#34a853"),
    ("yellow", "#fbbc05"),
    ("purple", "#673ab7"),
    ("pink", "#e91e63"),
    ("orange", "#ff9800"),
    ("teal", "#009688"),
]

BRAND_KEYWORDS = ["logo", "brand", "emblem", "symbol", "badge", "mark"]

# Containers whose descendants are treated as brand elements
BRAND_CONTAINERS = [
    "header", ".header", "#header",
    "nav", ".nav", "#nav",
    ".logo-container", "#logo-container",
    ".brand", "#brand",
]

EMPHASIS_CLASS_RE = re.compile(r'primary|brand|main|accent|theme', re.I)

KNOWN_SITE_COLORS = [
    {"domain": "youtube.com", "color": "#FF0000"},
    {"domain": "google.com", "color": "#4285F4"},
    {"domain": "facebook.com", "color": "#1877F2"},
    {"domain": "fb.com", "color": "#1877F2"},
    {"domain": "twitter.com", "color": "#1DA1F2"},
    {"domain": "x.com", "color": "#000000"},
    {"domain": "reddit.com", "color": "#FF4500"},
    {"domain": "pinterest.com", "color": "#E60023"},
    {"domain": "amazon.com", "color": "#FF9900"},
    {"domain": "netflix.com", "color": "#E50914"},
    {"domain": "github.com", "color": "#171515"},
    {"domain": "instagram.com", "color": "#E1306C"},
    {"domain": "linkedin.com", "color": "#0A66C2"},
    {"domain": "tumblr.com", "color": "#34526F"},
    {"domain": "twitch.tv", "color": "#9146FF"},
    {"domain": "wikipedia.org", "color": "#000000"},
    {"domain": "yahoo.com", "color": "#6001D2"},
    {"domain": "microsoft.com", "color": "#00A4EF"},
    {"domain": "apple.com", "color": "#000000"},
    {"domain": "bing.com", "color": "#008373"},
    {"domain": "slack.com", "color": "#4A154B"},
    {"domain": "claude.ai", "color": "#ED9C48"},
    {"domain": "anthropic.com", "color": "#ED9C48"},
    {"domain": "ebay.com", "color": "#E53238"},
    {"domain": "paypal.com", "color": "#00457C"},
    {"domain": "whatsapp.com", "color": "#25D366"},
    {"domain": "snapchat.com", "color": "#FFFC00"},
    {"domain": "tiktok.com", "color": "#000000"},
    {"domain": "spotify.com", "color": "#1DB954"},
    {"domain": "adobe.com", "color": "#FF0000"},
    {"domain": "dropbox.com", "color": "#0061FF"},
    {"domain": "salesforce.com", "color": "#00A1E0"},
    {"domain": "airbnb.com", "color": "#FF5A5F"},
    {"domain": "uber.com", "color": "#000000"},
    {"domain": "stackoverflow.com", "color": "#cf5b00"},
]


def shade_color(hue, shade):
    """Look up a utility-class shade, e.g. ("blue", "500")."""
    return SHADE_TABLE.get(hue, {}).get(int(shade))


def class_shade_color(class_name, pattern=BACKGROUND_SHADE_RE):
    """Return the table color for a ``bg-{hue}-{shade}`` style class name."""
    match = pattern.match(class_name)
    if not match:
        return None
    return shade_color(match.group(1), match.group(2))


def filename_color(src):
    """Return the palette color for the first color word in an image URL."""
    if not src:
        return None
    lowered = src.lower()
    for name, color in FILENAME_COLORS:
        if name in lowered:
            return color
    return None


def domain_matches(hostname, domain):
    """True if hostname is domain or a subdomain of it.

    Matching stops at label boundaries so "x.com" does not claim "dropbox.com".
    """
    hostname = hostname.lower().rstrip(".")
    domain = domain.lower().strip().lstrip(".")
    if not domain:
        return False
    return hostname == domain or hostname.endswith("." + domain)


def match_site_color(hostname, entries):
    """Return the color of the first entry whose domain matches hostname."""
    if not hostname:
        return None
    for entry in entries:
        domain = entry.get("domain")
        if domain and domain_matches(hostname, domain):
            return entry.get("color")
    return None
