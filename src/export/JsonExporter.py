import json
from dataclasses import dataclass
from geometry.Geometry import Geometry


@dataclass
class JsonExporter:

    @staticmethod
    def to_dict(geom: Geometry) -> dict:
        return {"polylines": [[[p.x, p.y] for p in pl.points] for pl in geom.polylines]}

    @staticmethod
    def export(geom: Geometry, path: str) -> None:
        """Export as JSON: { "polylines": [ [[x,y], ...], ... ] }. Use '-' for stdout."""
        data = json.dumps(JsonExporter.to_dict(geom), ensure_ascii=False, indent=4, separators=(",", ":"))
        if path == "-" or path == "stdout":
            print(data)
        else:
            with open(path, "w", encoding="utf-8") as f:
                f.write(data)
