"""built-in definitions of the special profiles."""
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional, Tuple

from ..domain.models import ProfileDefinition
from ..domain.options import (
    CFG_OPTION_DEFAULT_ACTION_KEY,
    CFG_OPTION_ENDPOINTS_KEY,
    CFG_OPTION_FILTER_LISTS_KEY,
    CFG_OPTION_SERVICE_ENDPOINTS_KEY,
)

# connections that could not be attributed to a process
UNIDENTIFIED_PROFILE_ID = "_unidentified"
UNIDENTIFIED_PROFILE_NAME = "Unidentified Processes"
UNIDENTIFIED_PROFILE_DESCRIPTION = """This is not a real application, but a collection of connections that could not be attributed to a process. This could be because Netwarden failed to identify the process, or simply because there is no process waiting for an incoming connection.

Seeing a lot of incoming connections here is normal, as this resembles the network chatter of other devices.
"""

# the operating system kernel
SYSTEM_PROFILE_ID = "_system"
SYSTEM_PROFILE_NAME = "Operating System"
SYSTEM_PROFILE_DESCRIPTION = "This is the operating system itself."

# the system's DNS client
SYSTEM_RESOLVER_PROFILE_ID = "_system-resolver"
SYSTEM_RESOLVER_PROFILE_NAME = "System DNS Client"
SYSTEM_RESOLVER_PROFILE_DESCRIPTION = """The System DNS Client is a system service that requires special handling. For regular network connections, the configured settings will apply as usual, but DNS requests coming from the System DNS Client are handled in a special way, as they could actually be coming from any other application on the system.

In order to respect the app settings of the actual application, DNS requests from the System DNS Client are only subject to the following settings:

- Outgoing Rules (without global rules)
- Block Bypassing
- Filter Lists

If you think you might have messed up the settings of the System DNS Client, just delete the profile below to reset it to the defaults.
"""

# netwarden's own components
CORE_PROFILE_ID = "_netwarden"
CORE_PROFILE_NAME = "Netwarden Core Service"
CORE_PROFILE_DESCRIPTION = "This is Netwarden itself, which runs in the background as a system service. App specific settings have no effect."

APP_PROFILE_ID = "_netwarden-app"
APP_PROFILE_NAME = "Netwarden User Interface"
APP_PROFILE_DESCRIPTION = "This is the Netwarden UI window."

NOTIFIER_PROFILE_ID = "_netwarden-notifier"
NOTIFIER_PROFILE_NAME = "Netwarden Notifier"
NOTIFIER_PROFILE_DESCRIPTION = "This is the Netwarden UI tray notifier."


class SpecialProfileID(str, Enum):
    UNIDENTIFIED = UNIDENTIFIED_PROFILE_ID
    SYSTEM = SYSTEM_PROFILE_ID
    SYSTEM_RESOLVER = SYSTEM_RESOLVER_PROFILE_ID
    CORE = CORE_PROFILE_ID
    APP = APP_PROFILE_ID
    NOTIFIER = NOTIFIER_PROFILE_ID


# profiles of netwarden's own processes; per-app settings are ignored for them
INTERNAL_PROFILE_IDS = frozenset({
    SpecialProfileID.CORE,
    SpecialProfileID.APP,
    SpecialProfileID.NOTIFIER,
})

SPECIAL_PROFILE_NAMES: Mapping[str, str] = MappingProxyType({
    UNIDENTIFIED_PROFILE_ID: UNIDENTIFIED_PROFILE_NAME,
    SYSTEM_PROFILE_ID: SYSTEM_PROFILE_NAME,
    SYSTEM_RESOLVER_PROFILE_ID: SYSTEM_RESOLVER_PROFILE_NAME,
    CORE_PROFILE_ID: CORE_PROFILE_NAME,
    APP_PROFILE_ID: APP_PROFILE_NAME,
    NOTIFIER_PROFILE_ID: NOTIFIER_PROFILE_NAME,
})

CATALOG: Mapping[SpecialProfileID, ProfileDefinition] = MappingProxyType({
    SpecialProfileID.UNIDENTIFIED: ProfileDefinition(
        name=UNIDENTIFIED_PROFILE_NAME,
        description=UNIDENTIFIED_PROFILE_DESCRIPTION,
    ),
    SpecialProfileID.SYSTEM: ProfileDefinition(
        name=SYSTEM_PROFILE_NAME,
        description=SYSTEM_PROFILE_DESCRIPTION,
    ),
    SpecialProfileID.SYSTEM_RESOLVER: ProfileDefinition(
        name=SYSTEM_RESOLVER_PROFILE_NAME,
        description=SYSTEM_RESOLVER_PROFILE_DESCRIPTION,
        default_settings={
            # resolved domains are checked again once attributed to the real
            # process, so permitting here avoids a second prompt for the same domain
            CFG_OPTION_DEFAULT_ACTION_KEY: "permit",
            # localhost and answers to multicast protocols used by system resolvers
            # TODO: drop the multicast rules once multicast responses can be
            # attributed to their requests.
            CFG_OPTION_SERVICE_ENDPOINTS_KEY: [
                "+ Localhost",
                "+ LAN UDP/5353",  # mDNS
                "+ LAN UDP/5355",  # LLMNR
                "+ LAN UDP/1900",  # SSDP
            ],
            # filter lists are enforced on the attributed connection instead
            CFG_OPTION_FILTER_LISTS_KEY: [],
        },
    ),
    SpecialProfileID.CORE: ProfileDefinition(
        name=CORE_PROFILE_NAME,
        description=CORE_PROFILE_DESCRIPTION,
    ),
    SpecialProfileID.APP: ProfileDefinition(
        name=APP_PROFILE_NAME,
        description=APP_PROFILE_DESCRIPTION,
        default_settings={
            CFG_OPTION_DEFAULT_ACTION_KEY: "block",
            CFG_OPTION_ENDPOINTS_KEY: [
                "+ Localhost",
                "+ .netwarden.io",
            ],
        },
    ),
    SpecialProfileID.NOTIFIER: ProfileDefinition(
        name=NOTIFIER_PROFILE_NAME,
        description=NOTIFIER_PROFILE_DESCRIPTION,
        default_settings={
            CFG_OPTION_DEFAULT_ACTION_KEY: "block",
            CFG_OPTION_ENDPOINTS_KEY: [
                "+ Localhost",
            ],
        },
    ),
})


def special_profile_id(profile_id: str) -> Optional[SpecialProfileID]:
    """return the identity for profile_id, or None if it is not special."""
    try:
        return SpecialProfileID(profile_id)
    except ValueError:
        return None


def definition_for(profile_id: str) -> Tuple[Optional[ProfileDefinition], bool]:
    """
    look up the built-in definition of a profile.

    an unknown id is not an error: the profile is an ordinary application.

    returns:
        (definition, found)
    """
    identity = special_profile_id(profile_id)
    if identity is None:
        return None, False
    return CATALOG[identity], True


def is_special_profile(profile_id: str) -> bool:
    return special_profile_id(profile_id) is not None


def is_internal_profile(profile_id: str) -> bool:
    return special_profile_id(profile_id) in INTERNAL_PROFILE_IDS
