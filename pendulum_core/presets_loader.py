#!/usr/bin/env python3
"""
Preset JSON loading utilities.

This module defines a simple JSON schema and loader for initial chain
configurations (pendulum_core/presets/*.json).

Schema
======
{
  "name": "Human-friendly preset name",
  "description": "Optional description",
  "links": [
    {"angle_deg": 45.0, "length": 1.0, "mass": 1.0},   # inner link
    {"angle_deg": 45.0, "length": 1.0, "mass": 1.0}    # outer link
  ]
}

angle_deg is measured from the downward vertical and defaults to 45. Length
and mass must be positive. Exactly two links are required; anything else is
treated as an unusable file.

Users can add their own JSON files into the presets folder and they'll be
picked up by the loader.
"""
import json
import logging
import math
import os
from dataclasses import dataclass
from typing import List, Optional, Tuple
from .constants import DEFAULT_ANGLE, DEFAULT_LENGTH, DEFAULT_MASS
from .data_models import Link

PRESETS_DIR = os.path.join(os.path.dirname(__file__), "presets")
DEFAULT_PRESET = "default.json"

logger = logging.getLogger(__name__)


@dataclass
class ChainPreset:
  name: str
  description: str
  links: List[Link]

  def angles(self) -> List[float]:
    return [link.angle for link in self.links]


def _read_json(path: str) -> Optional[dict]:
  try:
    with open(path, "r", encoding="utf-8") as f:
      return json.load(f)
  except (OSError, ValueError) as exc:
    logger.warning("could not read preset %s: %s", path, exc)
    return None


def _coerce_link(d: dict) -> Link:
  angle = math.radians(float(d.get("angle_deg", math.degrees(DEFAULT_ANGLE))))
  length = float(d.get("length", DEFAULT_LENGTH))
  mass = float(d.get("mass", DEFAULT_MASS))
  # Link rejects non-positive length/mass with ValueError
  return Link(angle, length, mass)


def list_presets(presets_dir: str = PRESETS_DIR) -> List[Tuple[str, str]]:
  """Return list of (file_name, display_name) for available presets."""
  items: List[Tuple[str, str]] = []
  if not os.path.isdir(presets_dir):
    return items
  for fn in sorted(os.listdir(presets_dir)):
    if not fn.lower().endswith(".json"):
      continue
    data = _read_json(os.path.join(presets_dir, fn)) or {}
    display = data.get("name") or os.path.splitext(fn)[0]
    items.append((fn, display))
  return items


def load_preset(file_name: str, presets_dir: str = PRESETS_DIR) -> Optional[ChainPreset]:
  """
  Load a preset JSON by file name.
  Returns None if the file is missing, unreadable or malformed.
  """
  data = _read_json(os.path.join(presets_dir, file_name))
  if not isinstance(data, dict):
    return None
  raw_links = data.get("links")
  if not isinstance(raw_links, list) or len(raw_links) != 2:
    logger.warning("preset %s must define exactly two links", file_name)
    return None
  try:
    links = [_coerce_link(d) for d in raw_links]
  except (AttributeError, TypeError, ValueError) as exc:
    logger.warning("preset %s has an invalid link: %s", file_name, exc)
    return None
  return ChainPreset(
    name=data.get("name") or os.path.splitext(file_name)[0],
    description=data.get("description", ""),
    links=links,
  )
