"""Links to race pages on ProCyclingStats."""

from __future__ import annotations

import re

from . import config


PCS_BASE_URL = "https://www.procyclingstats.com"

# Calendar names differ from the slugs PCS uses (Spanish names, accents).
PCS_RACE_SLUGS = {
    "Tour Down Under": "tour-down-under",
    "Alula Tour": "alula-tour",
    "Etoile de Bessèges": "etoile-de-besseges",
    "Comunidad Valenciana": "volta-a-la-comunitat-valenciana",
    "Tour de Omán": "tour-of-oman",
    "UAE Tour": "uae-tour",
    "Vuelta al Algarve": "volta-ao-algarve",
    "Ruta del Sol": "vuelta-a-andalucia",
    "París-Niza": "paris-nice",
    "Tirreno-Adriático": "tirreno-adriatico",
    "Volta a Catalunya": "volta-a-catalunya",
    "Itzulia Basque Country": "itzulia-basque-country",
    "O Gran Camiño": "o-gran-camino",
    "Tour de Romandía": "tour-de-romandie",
    "Giro d'Italia": "giro-d-italia",
    "Critérium du Dauphiné": "criterium-du-dauphine",
    "Tour de Suiza": "tour-de-suisse",
    "Tour de France": "tour-de-france",
    "Tour de Polonia": "tour-de-pologne",
    "Renewi Tour": "renewi-tour",
    "Vuelta a España": "vuelta-a-espana",
}

_WHITESPACE = re.compile(r"\s+")


def race_slug(race_name: str) -> str:
    slug = PCS_RACE_SLUGS.get(race_name)
    if slug is not None:
        return slug
    return _WHITESPACE.sub("-", race_name.lower())


def race_profile_url(race_name: str, season: int = config.SEASON) -> str:
    """Return the stage profiles page of ``race_name`` for ``season``."""

    return f"{PCS_BASE_URL}/race/{race_slug(race_name)}/{season}/route/stage-profiles"


__all__ = ["PCS_RACE_SLUGS", "race_profile_url", "race_slug"]
