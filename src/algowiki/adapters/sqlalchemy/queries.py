"""Read-side queries over the committed catalog."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from sqlalchemy import func, literal_column, select
from sqlalchemy.orm import aliased, contains_eager

from algowiki.adapters.sqlalchemy.mappings import (
    algorithm_table,
    glossary_table,
    meta_information_table,
    problem_table,
    reduction_table,
    search_table,
)
from algowiki.domain.model import Algorithm, GlossaryEntry, Problem, Reduction
from algowiki.domain.ports.queries import (
    CatalogReader,
    CatalogStats,
    DomainDetail,
    DomainSummary,
    FamilySummary,
    ProblemRef,
    VariationDetail,
    VariationSummary,
)
from algowiki.domain.search import SearchHit, prefix_query

if TYPE_CHECKING:
    from sqlalchemy import ColumnElement, Select
    from sqlalchemy.orm import Session


def _keyed(*columns: Any) -> list[Any]:
    # result rows expose the snake_case attribute names, not the camelCase column names
    return [column.label(column.key) for column in columns]


def _slug_criteria(
    pairs: tuple[tuple[Any, str | None], ...],
) -> list[ColumnElement[bool]]:
    return [column == value for column, value in pairs if value]


_algorithm_count = func.count(algorithm_table.c.id).label("algorithms")


def _with_algorithm_counts(*columns: Any) -> Select[Any]:
    return select(*_keyed(*columns), _algorithm_count).select_from(
        problem_table.outerjoin(
            algorithm_table, algorithm_table.c.problem_id == problem_table.c.id
        )
    )


class SqlAlchemyCatalogReader:
    def __init__(self, session: Session) -> None:
        self.session = session

    def search(self, term: str, *, limit: int = 10, offset: int = 0) -> list[SearchHit]:
        """Prefix search over every tier, best rank first, ties in insertion order."""

        query = prefix_query(term)
        if query is None:
            return []
        rank = literal_column("rank")
        rowid = literal_column("rowid")
        stmt = (
            select(rowid, rank, *_keyed(*search_table.c))
            .select_from(search_table)
            .where(literal_column(search_table.name).op("MATCH")(query))
            .order_by(rank, rowid)
            .limit(limit)
            .offset(offset)
        )
        return [SearchHit(**row._mapping) for row in self.session.execute(stmt)]

    def stats(self) -> CatalogStats:
        problems = problem_table.c
        stmt = select(
            func.count(func.distinct(problems.domain_slug)),
            func.count(func.distinct(problems.family_slug)),
            func.count(func.distinct(problems.variation_slug)),
        )
        domains, families, variations = self.session.execute(stmt).one()
        algorithms = self.session.execute(select(func.count(algorithm_table.c.id))).scalar_one()
        return CatalogStats(
            domains=domains,
            families=families,
            variations=variations,
            algorithms=algorithms,
        )

    def last_rebuilt(self) -> str | None:
        stmt = (
            select(meta_information_table.c.datetime)
            .order_by(meta_information_table.c.id.desc())
            .limit(1)
        )
        return self.session.execute(stmt).scalar_one_or_none()

    def glossary(self) -> list[GlossaryEntry]:
        stmt = select(GlossaryEntry).order_by(glossary_table.c.id)
        return list(self.session.scalars(stmt))

    # Taxonomy browsing -------------------------------------------------------

    def domains(self, *, limit: int | None = None) -> list[DomainSummary]:
        """Domains with their algorithm counts, largest first."""

        p = problem_table.c
        stmt = (
            _with_algorithm_counts(p.domain, p.domain_slug)
            .group_by(p.domain_slug, p.domain)
            .order_by(_algorithm_count.desc(), p.domain)
            .limit(limit)
        )
        return [DomainSummary(**row._mapping) for row in self.session.execute(stmt)]

    def domain(self, slug: str) -> DomainDetail | None:
        p = problem_table.c
        stmt = (
            select(
                p.domain,
                p.domain_slug,
                p.domain_description,
                p.number_of_families,
                p.number_of_variations,
                p.number_of_algorithms,
            )
            .where(p.domain_slug == slug)
            .order_by(p.id)
            .limit(1)
        )
        row = self.session.execute(stmt).first()
        if row is None:
            return None
        domain, domain_slug, description, families, variations, algorithms = row
        return DomainDetail(
            domain=domain,
            domain_slug=domain_slug,
            description=description,
            families=families,
            variations=variations,
            algorithms=algorithms,
        )

    def families(
        self, *, domain: str | None = None, limit: int | None = None
    ) -> list[FamilySummary]:
        p = problem_table.c
        stmt = (
            _with_algorithm_counts(p.domain, p.domain_slug, p.family, p.family_slug)
            .where(*_slug_criteria(((p.domain_slug, domain),)))
            .group_by(p.domain_slug, p.family_slug, p.domain, p.family)
            .order_by(_algorithm_count.desc(), p.family)
            .limit(limit)
        )
        return [FamilySummary(**row._mapping) for row in self.session.execute(stmt)]

    def variations(
        self,
        *,
        domain: str | None = None,
        family: str | None = None,
        limit: int | None = None,
    ) -> list[VariationSummary]:
        p = problem_table.c
        stmt = (
            _with_algorithm_counts(
                p.id,
                p.domain,
                p.domain_slug,
                p.family,
                p.family_slug,
                p.variation,
                p.variation_slug,
                p.parent_id,
            )
            .where(*_slug_criteria(((p.domain_slug, domain), (p.family_slug, family))))
            .group_by(p.id)
            .order_by(_algorithm_count.desc(), p.id)
            .limit(limit)
        )
        return [VariationSummary(**row._mapping) for row in self.session.execute(stmt)]

    def variation(self, slug: str, *, domain: str, family: str) -> VariationDetail | None:
        """Variation by its full slug path, with parent, children and family siblings."""

        p = problem_table.c
        stmt = (
            select(Problem)
            .where(p.domain_slug == domain, p.family_slug == family, p.variation_slug == slug)
            .order_by(p.id)
            .limit(1)
        )
        problem = self.session.scalars(stmt).first()
        if problem is None:
            return None

        parent_id = self.session.execute(
            select(p.parent_id).where(p.id == problem.id)
        ).scalar_one()
        children = self._refs(p.parent_id == problem.id)
        parent = next(iter(self._refs(p.id == parent_id)), None) if parent_id is not None else None

        excluded = [problem.id, *(child.id for child in children)]
        if parent_id is not None:
            excluded.append(parent_id)
        related = self._refs(
            p.domain_slug == problem.domain_slug,
            p.family_slug == problem.family_slug,
            p.variation_slug != problem.variation_slug,
            p.id.not_in(excluded),
        )
        return VariationDetail(problem=problem, parent=parent, children=children, related=related)

    def _refs(self, *criteria: ColumnElement[bool]) -> tuple[ProblemRef, ...]:
        p = problem_table.c
        stmt = (
            select(*_keyed(p.id, p.domain_slug, p.family_slug, p.variation, p.variation_slug))
            .where(*criteria)
            .order_by(p.id)
        )
        return tuple(ProblemRef(**row._mapping) for row in self.session.execute(stmt))

    # Listings ----------------------------------------------------------------

    def algorithms(
        self,
        *,
        domain: str | None = None,
        family: str | None = None,
        variation: str | None = None,
        limit: int | None = None,
    ) -> list[Algorithm]:
        """Algorithms with their problem loaded, filtered by the problem's slugs."""

        p = problem_table.c
        criteria = _slug_criteria(
            ((p.domain_slug, domain), (p.family_slug, family), (p.variation_slug, variation))
        )
        stmt = (
            select(Algorithm)
            .join(Algorithm.problem)
            .options(contains_eager(Algorithm.problem))
            .where(*criteria)
            .order_by(algorithm_table.c.id)
            .limit(limit)
        )
        return list(self.session.scalars(stmt))

    def reductions(
        self,
        *,
        domain: str | None = None,
        family: str | None = None,
        variation: str | None = None,
        limit: int | None = None,
    ) -> list[Reduction]:
        """Reductions with both endpoints loaded, filtered by the source problem's slugs."""

        source = aliased(Problem, name="source")
        target = aliased(Problem, name="target")
        criteria = _slug_criteria(
            (
                (source.domain_slug, domain),
                (source.family_slug, family),
                (source.variation_slug, variation),
            )
        )
        stmt = (
            select(Reduction)
            .join(Reduction.source.of_type(source))
            .join(Reduction.target.of_type(target))
            .options(
                contains_eager(Reduction.source.of_type(source)),
                contains_eager(Reduction.target.of_type(target)),
            )
            .where(*criteria)
            .order_by(reduction_table.c.id)
            .limit(limit)
        )
        return list(self.session.scalars(stmt))


if TYPE_CHECKING:
    _reader_check: CatalogReader = SqlAlchemyCatalogReader(Session())
