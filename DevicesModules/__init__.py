

from DevicesModules.custom_ubisys_c4 import (C4_MODEL, ubisys_c4_configure,
                                             ubisys_c4_exposes)
from DevicesModules.custom_ubisys_j1 import (J1_MODEL, ubisys_j1_ac_frequency,
                                             ubisys_j1_configure,
                                             ubisys_j1_current,
                                             ubisys_j1_energy,
                                             ubisys_j1_exposes,
                                             ubisys_j1_power_factor,
                                             ubisys_j1_window_covering)
from DevicesModules.custom_ubisys_ld6 import (LD6_MODEL,
                                              ubisys_ld6_advanced_options,
                                              ubisys_ld6_configure,
                                              ubisys_ld6_device_setup,
                                              ubisys_ld6_exposes,
                                              ubisys_ld6_heartbeat,
                                              ubisys_ld6_write_response)
from Modules.ubisysDeviceSetup import ubisys_device_setup
from Modules.zclClusterHelpers import CurrentPositionLiftPercentage

FUNCTION_WITH_ACTIONS_MODULE = {
    # ubisys Device Setup 0xfc00
    "ubisys_device_setup": ubisys_device_setup,
    "ubisys_ld6_device_setup": ubisys_ld6_device_setup,

    # ubisys LD6 Color Control manufacturer specific
    "ubisys_ld6_advanced_options": ubisys_ld6_advanced_options,

    # ubisys J1 0x0102
    "ubisys_j1_window_covering": ubisys_j1_window_covering,
}

FUNCTION_MODULE = {
    # 0702 helper
    "ubisys_j1_energy": ubisys_j1_energy,

    # 0b04 helper
    "ubisys_j1_ac_frequency": ubisys_j1_ac_frequency,
    "ubisys_j1_current": ubisys_j1_current,
    "ubisys_j1_power_factor": ubisys_j1_power_factor,

    # 0102 helper
    "current_position_lift_percent": CurrentPositionLiftPercentage,
}

FUNCTION_WRITE_RESPONSE_MODULE = {
    # ubisys LD6 OutputConfigurations accepted
    "ubisys_ld6_write_response": ubisys_ld6_write_response,
}

DEVICE_CONFIGURE_MODULE = {
    LD6_MODEL: ubisys_ld6_configure,
    J1_MODEL: ubisys_j1_configure,
    C4_MODEL: ubisys_c4_configure,
}

DEVICE_EXPOSES_MODULE = {
    LD6_MODEL: ubisys_ld6_exposes,
    J1_MODEL: ubisys_j1_exposes,
    C4_MODEL: ubisys_c4_exposes,
}

DEVICE_HEARTBEAT_MODULE = {
    LD6_MODEL: ubisys_ld6_heartbeat,
}
