"""Symbol catalog shared by the outcome engine and the spin controller."""
from pydantic import BaseModel, ConfigDict, Field, model_validator


class Symbol(BaseModel):
    """Immutable catalog entry."""

    model_config = ConfigDict(frozen=True)

    id: int
    glyph: str
    multiplier: float = Field(..., gt=0)


class SymbolCatalog(BaseModel):
    """
    Fixed, ordered sequence of symbols.

    Engine and controller must be built from catalogs with the same
    contents and ordering: draw indices are positions in this sequence.
    """

    model_config = ConfigDict(frozen=True)

    symbols: tuple[Symbol, ...]

    @model_validator(mode="after")
    def _check_symbols(self) -> "SymbolCatalog":
        if not self.symbols:
            raise ValueError("catalog must contain at least one symbol")
        ids = [symbol.id for symbol in self.symbols]
        if len(set(ids)) != len(ids):
            raise ValueError(f"catalog symbol ids must be unique: {ids}")
        return self

    def __len__(self) -> int:
        return len(self.symbols)

    def __getitem__(self, index: int) -> Symbol:
        return self.symbols[index]

    def contains_index(self, index: int) -> bool:
        return 0 <= index < len(self.symbols)


DEFAULT_CATALOG = SymbolCatalog(
    symbols=(
        Symbol(id=1, glyph="🍒", multiplier=10),
        Symbol(id=2, glyph="🍋", multiplier=20),
        Symbol(id=3, glyph="🍊", multiplier=30),
        Symbol(id=4, glyph="🍇", multiplier=40),
        Symbol(id=5, glyph="🔔", multiplier=50),
        Symbol(id=6, glyph="💎", multiplier=100),
    )
)
