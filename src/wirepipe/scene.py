"""Scene description loading.

A scene is ``{"view": {...}, "models": [...]}``; see :func:`scene_from_dict`
for the accepted keys.
"""
from __future__ import annotations

from dataclasses import dataclass, field
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from . import shapes
from .animation import Animation
from .math3d import Vec3
from .model import Model
from .view import ClipWindow, ProjectionKind, View

logger = logging.getLogger(__name__)

_MODEL_KEYS = {
    "generic": {"vertices", "edges"},
    "cube": {"center", "width", "height", "depth"},
    "cylinder": {"center", "radius", "height", "sides"},
    "cone": {"center", "radius", "height", "sides"},
    "sphere": {"center", "radius", "slices", "stacks"},
    "spiral": {"center", "radius", "slices", "stacks"},
}
_COMMON_KEYS = {"type", "animation", "center"}


@dataclass
class Scene:
    view: View
    models: List[Model] = field(default_factory=list)

    def update(self, seconds: float) -> None:
        for model in self.models:
            model.update(seconds)

    def segment_count(self) -> int:
        return sum(model.segment_count() for model in self.models)


def _require(data: Mapping[str, Any], key: str, where: str) -> Any:
    if key not in data:
        raise ValueError(f"{where} is missing required key {key!r}")
    return data[key]


def _mapping(value: Any, where: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ValueError(f"{where} must be an object, got {value!r}")
    return value


def _list(value: Any, where: str) -> list:
    if not isinstance(value, (list, tuple)):
        raise ValueError(f"{where} must be a list, got {value!r}")
    return list(value)


def _vec3(value: Any, where: str) -> Vec3:
    if not isinstance(value, (list, tuple)):
        raise ValueError(f"{where} must be a list of 3 numbers, got {value!r}")
    try:
        return Vec3.from_sequence(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{where}: {exc}") from exc


def _number(value: Any, where: str) -> float:
    if isinstance(value, bool):
        raise ValueError(f"{where} must be a number, got {value!r}")
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ValueError(f"{where} must be a number, got {value!r}") from None


def _count(value: Any, where: str) -> int:
    number = _number(value, where)
    if not number.is_integer():
        raise ValueError(f"{where} must be a whole number, got {value!r}")
    return int(number)


def view_from_dict(data: Mapping[str, Any]) -> View:
    data = _mapping(data, "view")
    kind = _require(data, "type", "view")
    try:
        projection = ProjectionKind(kind)
    except ValueError:
        raise ValueError(f"view type must be 'parallel' or 'perspective', got {kind!r}") from None

    clip = _list(_require(data, "clip", "view"), "view.clip")
    view = View(
        projection=projection,
        eye=_vec3(_require(data, "prp", "view"), "view.prp"),
        look_at=_vec3(_require(data, "srp", "view"), "view.srp"),
        up=_vec3(_require(data, "vup", "view"), "view.vup"),
        clip=ClipWindow.from_sequence([_number(v, f"view.clip[{i}]") for i, v in enumerate(clip)]),
    )
    view.validate()
    return view


def _animation_from_dict(data: Any, center: Optional[Vec3], where: str) -> Optional[Animation]:
    data = _mapping(data, f"{where}.animation")
    axis = data.get("axis")
    if axis is None:
        logger.warning("%s: animation without an axis is ignored", where)
        return None
    pivot = None
    if "pivot" in data:
        pivot = _vec3(data["pivot"], f"{where}.animation.pivot")
    elif data.get("center") == "y":
        if center is None:
            raise ValueError(f"{where}: animation pivots about the model center, but no center is given")
        pivot = center.copy()
    rps = _number(data.get("rps", 0.0), f"{where}.animation.rps")
    return Animation(axis=str(axis), rps=rps, pivot=pivot)


def _generic_vertices(value: Any, where: str) -> List[List[float]]:
    vertices = []
    for i, v in enumerate(_list(value, f"{where}.vertices")):
        v = _list(v, f"{where}.vertices[{i}]")
        if len(v) not in (3, 4):
            raise ValueError(f"{where}.vertices[{i}] must have 3 or 4 components, got {len(v)}")
        coords = [_number(c, f"{where}.vertices[{i}]") for c in v]
        vertices.append(coords + [1.0] * (4 - len(coords)))
    return vertices


def _edges(value: Any, where: str) -> List[List[int]]:
    return [_list(edge, f"{where}.edges[{i}]") for i, edge in enumerate(_list(value, f"{where}.edges"))]


def model_from_dict(data: Mapping[str, Any], index: int = 0) -> Model:
    where = f"models[{index}]"
    data = _mapping(data, where)
    kind = data.get("type", "generic")
    if not isinstance(kind, str) or kind not in _MODEL_KEYS:
        raise ValueError(f"{where}: unknown model type {kind!r}")
    for key in _MODEL_KEYS[kind]:
        _require(data, key, where)
    unknown = set(data) - _MODEL_KEYS[kind] - _COMMON_KEYS
    if unknown:
        logger.warning("%s: ignoring unknown keys %s", where, sorted(unknown))

    center = None
    if "center" in data:
        # The original format allows a 4-component center; w is dropped.
        value = data["center"]
        center = _vec3(value[:3] if isinstance(value, (list, tuple)) else value, f"{where}.center")

    def num(key: str) -> float:
        return _number(data[key], f"{where}.{key}")

    def count(key: str) -> int:
        return _count(data[key], f"{where}.{key}")

    if kind == "generic":
        model = Model(
            vertices=_generic_vertices(data["vertices"], where),
            edges=_edges(data["edges"], where),
            center=center,
        )
    elif kind == "cube":
        model = shapes.cube(center, num("width"), num("height"), num("depth"))
    elif kind == "cylinder":
        model = shapes.cylinder(center, num("radius"), num("height"), count("sides"))
    elif kind == "cone":
        model = shapes.cone(center, num("radius"), num("height"), count("sides"))
    elif kind == "sphere":
        model = shapes.sphere(center, num("radius"), count("slices"), count("stacks"))
    else:
        model = shapes.spiral(center, num("radius"), count("slices"), count("stacks"))

    if "animation" in data:
        model.animation = _animation_from_dict(data["animation"], center, where)
    return model


def scene_from_dict(data: Mapping[str, Any]) -> Scene:
    data = _mapping(data, "scene")
    view = view_from_dict(_require(data, "view", "scene"))
    models = _list(_require(data, "models", "scene"), "scene.models")
    return Scene(view=view, models=[model_from_dict(m, i) for i, m in enumerate(models)])


def load_scene(path: str | Path) -> Scene:
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Scene not found: {p}")
    with p.open("r", encoding="utf-8") as f:
        try:
            data: Dict[str, Any] = json.load(f)
        except json.JSONDecodeError as exc:
            raise ValueError(f"{p}: not valid JSON ({exc})") from exc
    scene = scene_from_dict(data)
    logger.info(
        "loaded scene %s: %s view, %d models, %d vertices, %d segments",
        p,
        scene.view.projection.value,
        len(scene.models),
        sum(m.vertex_count for m in scene.models),
        scene.segment_count(),
    )
    return scene
