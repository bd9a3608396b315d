"""Known-country catalog: the closed set of codes reported on by the relay."""

import json
import logging
from pathlib import Path

logger = logging.getLogger(__name__)

# ISO 3166-1 alpha-2, as used in Radar annotation `locations`
_ISO_CODES = """
AD AE AF AG AI AL AM AO AQ AR AS AT AU AW AX AZ
BA BB BD BE BF BG BH BI BJ BL BM BN BO BQ BR BS BT BV BW BY BZ
CA CC CD CF CG CH CI CK CL CM CN CO CR CU CV CW CX CY CZ
DE DJ DK DM DO DZ
EC EE EG EH ER ES ET
FI FJ FK FM FO FR
GA GB GD GE GF GG GH GI GL GM GN GP GQ GR GS GT GU GW GY
HK HM HN HR HT HU
ID IE IL IM IN IO IQ IR IS IT
JE JM JO JP
KE KG KH KI KM KN KP KR KW KY KZ
LA LB LC LI LK LR LS LT LU LV LY
MA MC MD ME MF MG MH MK ML MM MN MO MP MQ MR MS MT MU MV MW MX MY MZ
NA NC NE NF NG NI NL NO NP NR NU NZ
OM
PA PE PF PG PH PK PL PM PN PR PS PT PW PY
QA
RE RO RS RU RW
SA SB SC SD SE SG SH SI SJ SK SL SM SN SO SR SS ST SV SX SY SZ
TC TD TF TG TH TJ TK TL TM TN TO TR TT TV TW TZ
UA UG UM US UY UZ
VA VC VE VG VI VN VU
WF WS
XK
YE YT
ZA ZM ZW
"""

KNOWN_COUNTRIES: frozenset[str] = frozenset(_ISO_CODES.split())


def load_known_countries(path: str | Path | None = None) -> frozenset[str]:
    """Return the bundled country set, or the JSON array of codes at `path`."""
    if not path:
        return KNOWN_COUNTRIES

    data = json.loads(Path(path).read_text())
    if not isinstance(data, list):
        raise ValueError(f"Countries file {path} must contain a JSON array")

    codes = frozenset(c.strip().upper() for c in data if isinstance(c, str) and c.strip())
    logger.info("Loaded %d known countries from %s", len(codes), path)
    return codes


def is_known_country(code: object, known: frozenset[str] = KNOWN_COUNTRIES) -> bool:
    return isinstance(code, str) and code in known
