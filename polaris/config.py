"""Polaris configuration file module."""

from dataclasses import dataclass
from typing import Dict, Optional, Type

from .errors import ConfigurationError


@dataclass
class MediumConfig:
    density: float # [1 / m3]
    gamma3: float # [m2 / V2]
    ionization_potential: Optional[float] = None # [eV]

@dataclass
class RealGridConfig:
    zmax: float # [m]
    reference_wavelength: float # [m]
    wavelength_min: float # [m]
    wavelength_max: float # [m]
    time_range: float # [s]
    time_step: Optional[float] = None # [s]

@dataclass
class EnvGridConfig:
    zmax: float # [m]
    reference_wavelength: float # [m]
    wavelength_min: float # [m]
    wavelength_max: float # [m]
    time_range: float # [s]
    time_step: Optional[float] = None # [s]
    thg: Optional[bool] = False

@dataclass
class PulseConfig:
    wavelength: float # [m]
    duration: float  # FWHM of intensity [s]
    energy: float # [J]
    waist: Optional[float] = None  # 1/e^2 intensity radius [m], free space only

@dataclass
class ModeAverageConfig:
    radius: float # [m]
    cladding: Optional[str] = "silica"
    loss: Optional[bool] = True

@dataclass
class ModalConfig:
    radius: float # [m]
    modes: Optional[int] = 1
    components: Optional[str] = "Ey"
    full: Optional[bool] = False
    rtol: Optional[float] = 1e-3
    atol: Optional[float] = 0.0
    max_evals: Optional[int] = 300
    cladding: Optional[str] = "silica"
    loss: Optional[bool] = True

@dataclass
class RadialConfig:
    aperture: float # [m]
    points: int

@dataclass
class FreeConfig:
    half_width: float # [m]
    points: int

@dataclass
class ResponseConfig:
    kerr: Optional[bool] = True
    thg: Optional[bool] = True
    plasma: Optional[bool] = False

MEDIUM_CONFIG_CLASSES: Dict[str, Type] = {
    "air": MediumConfig,
    "water": MediumConfig,
    "silica": MediumConfig,
}

GRID_CONFIG_CLASSES: Dict[str, Type] = {
    "real": RealGridConfig,
    "envelope": EnvGridConfig,
}

PULSE_CONFIG_CLASSES: Dict[str, Type] = {
    "gaussian": PulseConfig,
    "sech": PulseConfig,
}

GEOMETRY_CONFIG_CLASSES: Dict[str, Type] = {
    "mode_average": ModeAverageConfig,
    "modal": ModalConfig,
    "radial": RadialConfig,
    "free": FreeConfig,
}

COMPUTING_BACKENDS = ("scipy", "pyfftw")

def _lowercase_dict(d: Dict) -> Dict:
    new_dict = {}
    for k, v in d.items():
        lower_key = k.lower()
        if isinstance(v, dict):
            new_dict[lower_key] = _lowercase_dict(v)
        else:
            new_dict[lower_key] = v
    return new_dict

def _select(section: str, parameters: Dict[str, Dict], classes: Dict[str, Type]):
    """Pick the single named entry of a section and build its dataclass."""
    if len(parameters) != 1:
        raise ConfigurationError(
            f"Exactly one {section} must be given, got {len(parameters)}."
        )
    name = next(iter(parameters))
    if name not in classes:
        raise ConfigurationError(
            f"Invalid {section}: '{name}'. "
            f"Available options are: {', '.join(classes)}"
        )
    try:
        return name, classes[name](**parameters[name])
    except TypeError as exc:
        raise ConfigurationError(f"Invalid {section} parameters: {exc}") from exc

@dataclass
class ConfigOptions:
    """
    This class provides different dataclass key-var
    pairs needed for building a nonlinear transform. Each key
    corresponds to a specific option and they must be
    selected by the user manually.

    The available options are

    Parameters                          Choice
    =============================       ======================================
     medium_name : str                  "air" | "water" | "silica"
     medium_par : object                see "classes" above for the list
     grid_name : str                    "real" | "envelope"
     grid_par : object                  see "classes" above for the list
     pulse_name : str                   "gaussian" | "sech"
     pulse_par : object                 see "classes" above for the list
     geometry_name : str                "mode_average" | "modal" | "radial" | "free"
     geometry_par : object              see "classes" above for the list
     response_par : object              kerr, thg and plasma switches
     computing_backend : str            "scipy" | "pyfftw"
    =============================       ======================================

    """
    medium_name: str
    medium_par: object
    grid_name: str
    grid_par: object
    pulse_name: str
    pulse_par: object
    geometry_name: str
    geometry_par: object
    response_par: object
    computing_backend: str

    @staticmethod
    def build(
        medium_parameters: Dict[str, Dict],
        grid_parameters: Dict[str, Dict],
        pulse_parameters: Dict[str, Dict],
        geometry: Dict[str, Dict],
        responses: Optional[Dict] = None,
        computing_backend: str = "scipy"
    ) -> "ConfigOptions":

        medium_parameters = _lowercase_dict(medium_parameters)
        grid_parameters = _lowercase_dict(grid_parameters)
        pulse_parameters = _lowercase_dict(pulse_parameters)
        geometry = _lowercase_dict(geometry)
        responses = _lowercase_dict(responses or {})

        medium_name, medium_config = _select(
            "medium", medium_parameters, MEDIUM_CONFIG_CLASSES
        )
        grid_name, grid_config = _select("grid", grid_parameters, GRID_CONFIG_CLASSES)
        pulse_name, pulse_config = _select(
            "pulse", pulse_parameters, PULSE_CONFIG_CLASSES
        )
        geometry_name, geometry_config = _select(
            "geometry", geometry, GEOMETRY_CONFIG_CLASSES
        )

        try:
            response_config = ResponseConfig(**responses)
        except TypeError as exc:
            raise ConfigurationError(f"Invalid response switches: {exc}") from exc

        if response_config.plasma:
            if grid_name == "envelope":
                raise ConfigurationError(
                    "The plasma response is only available for real fields."
                )
            if medium_config.ionization_potential is None:
                raise ConfigurationError(
                    "ionization_potential must be given for the plasma response."
                )

        if geometry_name in ("radial", "free") and pulse_config.waist is None:
            raise ConfigurationError(
                f"waist must be given for '{geometry_name}' geometry."
            )

        computing_backend = computing_backend.lower()
        if computing_backend not in COMPUTING_BACKENDS:
            raise ConfigurationError(
                f"Invalid computing backend: '{computing_backend}'. "
                f"Available backends are: {', '.join(COMPUTING_BACKENDS)}"
            )

        return ConfigOptions(
            medium_name=medium_name,
            medium_par=medium_config,
            grid_name=grid_name,
            grid_par=grid_config,
            pulse_name=pulse_name,
            pulse_par=pulse_config,
            geometry_name=geometry_name,
            geometry_par=geometry_config,
            response_par=response_config,
            computing_backend=computing_backend
        )
