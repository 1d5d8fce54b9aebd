"""Problems: the nodes of the domain → family → variation taxonomy."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Final

from algowiki.domain.slugs import join_slugs, slug_list, slugify

DEFAULT_DOMAIN: Final[str] = "Others"


@dataclass(eq=False, kw_only=True)
class Problem:
    """One variation of a problem family.

    Slugs are derived from the display names on construction; ``alias_slug``
    is the storage form of :attr:`alias_slugs`.
    """

    id: int | None = None

    family: str
    variation: str
    domain: str = ""
    alias: str = ""

    domain_slug: str = field(init=False, default="")
    family_slug: str = field(init=False, default="")
    variation_slug: str = field(init=False, default="")
    alias_slug: str = field(init=False, default="")

    description: str = ""
    short_description: str = ""
    problem_properties: str = ""
    family_properties: str = ""
    family_description: str = ""
    domain_description: str = ""
    description_reference: str = ""
    parameters: str = ""
    parameter_for_graphs: str = ""
    input_size: str = ""
    output_size: str = ""
    best_known_upper_bound: str = ""
    upper_bound_reference: str = ""
    best_known_lower_bound: str = ""
    lower_bound_reference: str = ""

    parent: Problem | None = field(default=None, repr=False)

    number_of_algorithms: int | None = None
    number_of_variations: int | None = None
    number_of_families: int | None = None

    def __post_init__(self) -> None:
        self.domain_slug = slugify(self.domain)
        self.family_slug = slugify(self.family)
        self.variation_slug = slugify(self.variation)
        self.alias_slug = join_slugs(slug_list(self.alias))

    @classmethod
    def placeholder(cls, *, family: str, variation: str) -> Problem:
        """Minimal problem standing in for an endpoint nobody described."""

        return cls(family=family, variation=variation)

    @property
    def alias_slugs(self) -> tuple[str, ...]:
        return tuple(token for token in self.alias_slug.split(";") if token)

    @property
    def has_domain(self) -> bool:
        return bool(self.domain)

    def assign_domain(self, domain: str, description: str | None = None) -> None:
        self.domain = domain
        self.domain_slug = slugify(domain)
        if description is not None:
            self.domain_description = description
