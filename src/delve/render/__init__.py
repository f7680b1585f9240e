from .glyphs import Glyph, classify_glyph, neighborhood_of, render_ascii

__all__ = ["Glyph", "classify_glyph", "neighborhood_of", "render_ascii"]
