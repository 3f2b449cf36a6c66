"""Catálogo estático de rovers y sus cámaras.

El servicio no expone esta lista de forma barata, así que la mantenemos aquí
para validar el nombre del rover y para que la CLI pueda listar cámaras.
"""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass


@dataclass(frozen=True)
class CameraInfo:
    code: str
    name: str


@dataclass(frozen=True)
class RoverInfo:
    key: str
    name: str
    status: str
    landing_date: dt.date
    location: str
    mission: str
    cameras: tuple[CameraInfo, ...]

    def camera_codes(self) -> tuple[str, ...]:
        return tuple(camera.code for camera in self.cameras)


_FHAZ = CameraInfo("FHAZ", "Front Hazard Avoidance Camera")
_RHAZ = CameraInfo("RHAZ", "Rear Hazard Avoidance Camera")
_NAVCAM = CameraInfo("NAVCAM", "Navigation Camera")
_PANCAM = CameraInfo("PANCAM", "Panoramic Camera")
_MINITES = CameraInfo("MINITES", "Miniature Thermal Emission Spectrometer")

ROVERS: dict[str, RoverInfo] = {
    "curiosity": RoverInfo(
        key="curiosity",
        name="Curiosity",
        status="active",
        landing_date=dt.date(2012, 8, 6),
        location="Gale Crater",
        mission="Search for evidence of past life",
        cameras=(
            _FHAZ,
            _RHAZ,
            CameraInfo("MAST", "Mast Camera"),
            CameraInfo("CHEMCAM", "Chemistry and Camera Complex"),
            CameraInfo("MAHLI", "Mars Hand Lens Imager"),
            CameraInfo("MARDI", "Mars Descent Imager"),
            _NAVCAM,
        ),
    ),
    "opportunity": RoverInfo(
        key="opportunity",
        name="Opportunity",
        status="complete (2018)",
        landing_date=dt.date(2004, 1, 25),
        location="Meridiani Planum",
        mission="Search for evidence of past water",
        cameras=(_FHAZ, _RHAZ, _NAVCAM, _PANCAM, _MINITES),
    ),
    "spirit": RoverInfo(
        key="spirit",
        name="Spirit",
        status="complete (2010)",
        landing_date=dt.date(2004, 1, 4),
        location="Gusev Crater",
        mission="Search for evidence of past water",
        cameras=(_FHAZ, _RHAZ, _NAVCAM, _PANCAM, _MINITES),
    ),
}


def get_rover(name: str) -> RoverInfo | None:
    return ROVERS.get(name.strip().lower())
