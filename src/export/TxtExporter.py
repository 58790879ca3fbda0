from dataclasses import dataclass
from geometry.Geometry import Geometry


@dataclass
class TxtExporter:

    @staticmethod
    def to_text(geom: Geometry) -> str:
        """One polyline per line, 'x1,y1 x2,y2 ...'."""
        lines = [" ".join(f"{p.x!r},{p.y!r}" for p in pl.points) for pl in geom.polylines]
        return "\n".join(lines) + "\n"

    @staticmethod
    def export(geom: Geometry, path: str) -> None:
        data = TxtExporter.to_text(geom)
        if path == "-" or path == "stdout":
            print(data, end="")
        else:
            with open(path, "w", encoding="utf-8") as f:
                f.write(data)
