"""Typed hybrid query builder for RediSearch.

A hybrid query is a pre-filter (match everything, or an OR of metadata
tags) combined with a KNN clause over the vector field. The value types
here render to RediSearch dialect-2 syntax and to a redis-py ``Query``.
"""

from dataclasses import dataclass

from redis.commands.search.query import Query

from redvec.vector.codec import escape_special_chars

VECTOR_PARAM = "vector"
SCORE_ALIAS = "vector_score"
QUERY_DIALECT = 2


@dataclass(frozen=True)
class MatchAll:
    """Pre-filter that matches every record in the index."""

    def render(self) -> str:
        return "*"


@dataclass(frozen=True)
class TagDisjunction:
    """Pre-filter matching records whose text field contains any of the tags."""

    field: str
    tags: tuple[str, ...]

    def render(self) -> str:
        joined = "|".join(escape_special_chars(tag) for tag in self.tags)
        return f"@{self.field}:({joined})"


Prefilter = MatchAll | TagDisjunction


@dataclass(frozen=True)
class KnnClause:
    """K-nearest-neighbour clause against a vector field."""

    k: int
    field: str
    param: str = VECTOR_PARAM
    score_alias: str = SCORE_ALIAS

    def __post_init__(self) -> None:
        if self.k <= 0:
            raise ValueError(f"k must be positive, got {self.k}")

    def render(self) -> str:
        return f"[KNN {self.k} @{self.field} ${self.param} AS {self.score_alias}]"


@dataclass(frozen=True)
class HybridQuery:
    """A pre-filter plus KNN clause, with the fields to return."""

    prefilter: Prefilter
    knn: KnnClause
    return_fields: tuple[str, ...] = ()
    dialect: int = QUERY_DIALECT

    def render(self) -> str:
        return f"{self.prefilter.render()} => {self.knn.render()}"

    def to_query(self) -> Query:
        """Build the redis-py Query: sorted ascending by score, window [0, k)."""
        return (
            Query(self.render())
            .return_fields(*self.return_fields, self.knn.score_alias)
            .sort_by(self.knn.score_alias, asc=True)
            .paging(0, self.knn.k)
            .dialect(self.dialect)
        )


def build_prefilter(metadata_field: str, tags: list[str] | None) -> Prefilter:
    """OR the tags against the metadata field; no tags matches everything."""
    if tags:
        return TagDisjunction(field=metadata_field, tags=tuple(tags))
    return MatchAll()


def build_hybrid_query(
    *,
    k: int,
    vector_field: str,
    metadata_field: str,
    content_field: str,
    tags: list[str] | None = None,
) -> HybridQuery:
    """Build the query used by similarity search."""
    return HybridQuery(
        prefilter=build_prefilter(metadata_field, tags),
        knn=KnnClause(k=k, field=vector_field),
        return_fields=(metadata_field, content_field),
    )
