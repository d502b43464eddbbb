"""option keys used in profile settings bundles.

the profile subsystem stores these keys but never interprets them; the
filter engine owns their meaning.
"""

CFG_OPTION_DEFAULT_ACTION_KEY = "filter/defaultAction"
CFG_OPTION_ENDPOINTS_KEY = "filter/endpoints"
CFG_OPTION_SERVICE_ENDPOINTS_KEY = "filter/serviceEndpoints"
CFG_OPTION_FILTER_LISTS_KEY = "filter/lists"
