CP_AIR = 1005.0

# Validity range of the Mundt gradient correlation [K/m]
MIN_SLOPE = 0.001
MAX_SLOPE = 5.0

# Supply flow [m3/s] and cooling load [W] below which the zone is treated as well mixed
ACTIVE_THRESHOLD = 1e-4
SYSTEM_OFF_MDOT = 1e-4

T_INIT = 25.0
KELVIN = 273.15
P0 = 101325.0

R_DRY_AIR = 287.0
EPS_WATER = 0.621945

AIR_MODEL_MUNDT = "mundt"
AIR_MODEL_MIXING = "mixing"
COUPLING_DIRECT = "direct"
COUPLING_INDIRECT = "indirect"

TAIR_REF_ADJACENT = "adjacent_air_temp"
TAIR_REF_ZONE_MEAN = "zone_mean_air"
