"""
Colours and type sizes for export documents.
"""


class Colors:
    # Page backgrounds
    PAGE = "#FFFFFF"
    SHOW_DAY_BACKGROUND = "#F7F7F7"
    COVER_DARK = "#000000"
    COVER_LIGHT = "#FFFFFF"

    # Cards
    CARD = "#FFFFFF"
    CARD_BORDER = "#E0E0E0"
    NOTES_BACKGROUND = "#FFF8E1"
    PLACEHOLDER = "#D9D9D9"

    # Text
    TEXT_PRIMARY = "#1F1F1F"
    TEXT_SECONDARY = "#666666"
    TEXT_ON_DARK = "#FFFFFF"
    TEXT_MUTED_ON_DARK = "#BBBBBB"

    # Accents
    ACCENT = "#7B2CBF"
    BADGE = "#1F1F1F"
    BADGE_TEXT = "#FFFFFF"
    TABLE_HEADER = "#EEEEEE"
    DIVIDER = "#DDDDDD"


class FontSizes:
    TITLE = 28
    HEADING = 20
    SUBHEADING = 14
    BODY = 11
    SMALL = 9
    COVER_ARTIST = 22
    COVER_TITLE = 40
