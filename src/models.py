"""Data classes for pedigree entities and layout results."""

from dataclasses import asdict, dataclass, field
from typing import Literal

Sex = Literal["M", "F"]


@dataclass
class Animal:
    id: str
    name: str
    gender: str  # "Male" or "Female"
    sire_id: str | None = None
    dam_id: str | None = None
    photo_url: str | None = None
    tag_id: str | None = None
    birth_date: str | None = None  # ISO format YYYY-MM-DD or None
    breed: str | None = None

    @property
    def sex(self) -> Sex:
        return "M" if self.gender == "Male" else "F"


@dataclass
class Subject:
    id: str
    name: str
    sex: Sex
    generation: int  # 0 = root, positive = ancestors, negative = descendants
    father_id: str | None = None
    mother_id: str | None = None
    photo_url: str | None = None
    tag_id: str | None = None
    birth_date: str | None = None
    breed: str | None = None


@dataclass
class PedigreeData:
    subjects: list[Subject]
    root_subject_id: str


@dataclass(frozen=True)
class LayoutConfig:
    node_width: float = 200
    node_height: float = 140
    generation_gap: float = 200  # vertical distance between generation bands
    sibling_gap: float = 30  # horizontal gap between neighbours in a band

    @property
    def pitch(self) -> float:
        return self.node_width + self.sibling_gap


@dataclass
class LayoutNode(Subject):
    # Top-left corner of the node box
    x: float = 0.0
    y: float = 0.0

    @classmethod
    def from_subject(cls, subject: Subject, x: float, y: float) -> "LayoutNode":
        return cls(**asdict(subject), x=x, y=y)


@dataclass
class LayoutEdge:
    from_id: str  # parent
    to_id: str  # child
    path: str  # SVG path definition
    color: str | None = None


@dataclass
class Bounds:
    min_x: float = 0.0
    max_x: float = 0.0
    min_y: float = 0.0
    max_y: float = 0.0

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y


@dataclass
class LayoutResult:
    nodes: list[LayoutNode] = field(default_factory=list)
    edges: list[LayoutEdge] = field(default_factory=list)
    bounds: Bounds = field(default_factory=Bounds)

    @classmethod
    def empty(cls) -> "LayoutResult":
        return cls()

    def to_dict(self) -> dict:
        """Render-ready structure with the camelCase keys the front end expects."""
        return {
            "nodes": [
                {
                    "id": n.id,
                    "name": n.name,
                    "sex": n.sex,
                    "generation": n.generation,
                    "fatherId": n.father_id,
                    "motherId": n.mother_id,
                    "photoUrl": n.photo_url,
                    "tagId": n.tag_id,
                    "birthDate": n.birth_date,
                    "breed": n.breed,
                    "x": n.x,
                    "y": n.y,
                }
                for n in self.nodes
            ],
            "edges": [
                {"from": e.from_id, "to": e.to_id, "path": e.path, "color": e.color}
                for e in self.edges
            ],
            "bounds": {
                "minX": self.bounds.min_x,
                "maxX": self.bounds.max_x,
                "minY": self.bounds.min_y,
                "maxY": self.bounds.max_y,
            },
        }


def compute_bounds(nodes: list[LayoutNode], config: LayoutConfig) -> Bounds:
    """Bounding box of positioned nodes, zeros when there are none."""
    if not nodes:
        return Bounds()
    xs = [n.x for n in nodes]
    ys = [n.y for n in nodes]
    return Bounds(
        min_x=min(xs),
        max_x=max(xs) + config.node_width,
        min_y=min(ys),
        max_y=max(ys) + config.node_height,
    )


@dataclass(frozen=True)
class ViewportTransform:
    x: float
    y: float
    scale: float
