from __future__ import annotations

from ign_check.lookup.quirks import ERROR_CODE_SENTINEL, SUCCESS_FLAG, SUCCESS_OR_SENTINEL
from ign_check.lookup.registry import GameRegistry
from ign_check.lookup.types import GameProfile

# Zone the storefront expects for titles without a real server selector.
GLOBAL_ZONE_ID = "os_001"

# -----------------------------
# Genshin Impact servers
# -----------------------------

GENSHIN_DEFAULT_SERVER = "os_asia"
GENSHIN_SERVER_BY_UID_PREFIX: dict[str, str] = {
    "6": "os_usa",
    "7": "os_euro",
    "8": "os_asia",
    "9": "os_cht",
}
GENSHIN_REGION_BY_SERVER: dict[str, str] = {
    "os_usa": "America",
    "os_euro": "Europe",
    "os_asia": "Asia",
    "os_cht": "TW_HK_MO",
}
GENSHIN_DEFAULT_REGION = GENSHIN_REGION_BY_SERVER[GENSHIN_DEFAULT_SERVER]


def genshin_server_for_uid(uid: str) -> str:
    """The first digit of a Genshin UID encodes its server."""

    return GENSHIN_SERVER_BY_UID_PREFIX.get(uid.strip()[:1], GENSHIN_DEFAULT_SERVER)


def genshin_region_name(server: str) -> str:
    return GENSHIN_REGION_BY_SERVER.get(server, GENSHIN_DEFAULT_REGION)


def clash_tag(tag: str) -> str:
    tag = tag.strip()
    return tag if tag.startswith("#") else f"#{tag}"


GAME_PROFILES: tuple[GameProfile, ...] = (
    GameProfile(
        code="mlbb",
        display_name="Mobile Legends",
        voucher_type_name="MOBILE_LEGENDS",
        price_point_id="27684",
        price="527250",
        quirk=SUCCESS_FLAG,
        requires_zone=True,
        platform="Mobile",
        description="Mobile Legends: Bang Bang. Requires the numeric zone id.",
    ),
    GameProfile(
        code="genshin",
        display_name="Genshin Impact",
        voucher_type_name="GENSHIN_IMPACT",
        price_point_id="116054",
        price="16500",
        quirk=ERROR_CODE_SENTINEL,
        zone_resolver=genshin_server_for_uid,
        zone_renderer=genshin_region_name,
        account_label="uid",
        zone_label="server",
        platform="Mobile, PC, Console",
        description="Genshin Impact. The server is derived from the UID.",
    ),
    GameProfile(
        code="pubg-mobile",
        display_name="PUBG Mobile",
        voucher_type_name="PUBG_MOBILE",
        price_point_id="194305",
        price="16500",
        quirk=SUCCESS_OR_SENTINEL,
        default_zone_id=GLOBAL_ZONE_ID,
        description="PUBG Mobile global.",
        verified=False,
    ),
    GameProfile(
        code="free-fire",
        display_name="Free Fire",
        voucher_type_name="FREE_FIRE",
        price_point_id="46741",
        price="16500",
        quirk=SUCCESS_OR_SENTINEL,
        default_zone_id=GLOBAL_ZONE_ID,
        description="Garena Free Fire.",
        verified=False,
    ),
    GameProfile(
        code="cod-mobile",
        display_name="Call of Duty Mobile",
        voucher_type_name="CALL_OF_DUTY_MOBILE",
        price_point_id="242461",
        price="16500",
        quirk=SUCCESS_OR_SENTINEL,
        default_zone_id=GLOBAL_ZONE_ID,
        description="Call of Duty: Mobile (Garena).",
        verified=False,
    ),
    GameProfile(
        code="valorant",
        display_name="Valorant",
        voucher_type_name="VALORANT",
        price_point_id="297513",
        price="105000",
        quirk=SUCCESS_OR_SENTINEL,
        default_zone_id=GLOBAL_ZONE_ID,
        account_label="riot_id",
        platform="PC",
        description="Valorant. Look up by Riot ID.",
        verified=False,
    ),
    GameProfile(
        code="lol",
        display_name="League of Legends",
        voucher_type_name="LEAGUE_OF_LEGENDS",
        price_point_id="59721",
        price="105000",
        quirk=SUCCESS_OR_SENTINEL,
        default_zone_id=GLOBAL_ZONE_ID,
        account_label="riot_id",
        platform="PC",
        description="League of Legends. Look up by Riot ID.",
        verified=False,
    ),
    GameProfile(
        code="coc",
        display_name="Clash of Clans",
        voucher_type_name="CLASH_OF_CLANS",
        price_point_id="40948",
        price="16500",
        quirk=SUCCESS_FLAG,
        user_id_formatter=clash_tag,
        account_label="tag",
        description="Clash of Clans. Look up by player tag.",
    ),
)

# Known titles the provider integration does not cover yet.
UNSUPPORTED_GAME_NAMES: dict[str, str] = {
    "dota2": "Dota 2",
    "cs2": "Counter-Strike 2",
    "apex": "Apex Legends",
    "fortnite": "Fortnite",
    "minecraft": "Minecraft",
    "roblox": "Roblox",
    "fifa-mobile": "FIFA Mobile",
    "efootball": "eFootball",
}


def unsupported_game_name(code: str) -> str:
    return UNSUPPORTED_GAME_NAMES.get(code.strip().lower(), code)


def build_default_registry() -> GameRegistry:
    return GameRegistry(GAME_PROFILES)
