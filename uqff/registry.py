"""
UQFF term registry: TermRegistry and the default population.

The registry owns every PhysicsTerm instance, keyed by name, with the
category tag stored at registration time. It is populated once at
startup and read-only while simulations run.

Duplicate names replace the earlier entry (the count does not grow).
Each replacement is logged as a warning and passed to an optional
on_duplicate hook so collisions stay visible.

Listing order is registration order.

IMPORTANT: No unicode characters allowed (Windows charmap constraint).
"""

import logging
from collections import OrderedDict

from uqff.terms.gravity import GRAVITY_TERMS
from uqff.terms.muge import CompressedMUGE, ResonanceMUGE, system_terms
from uqff.terms.helpers import HELPER_TERMS
from uqff.terms.compressed import COMPRESSED_TERMS
from uqff.terms.resonance import resonance_terms
from uqff.terms.source6 import SOURCE6_TERMS

log = logging.getLogger(__name__)

RESONANCE_CATEGORY = "muge_resonance"


class TermRegistry:
    """
    Central lookup container for registered PhysicsTerm instances.

    Parameters
    ----------
    on_duplicate : callable, optional
        Called as on_duplicate(name, old_term, new_term) whenever a name
        is registered a second time.
    """

    def __init__(self, on_duplicate=None):
        self._terms = OrderedDict()
        self._categories = {}
        self.on_duplicate = on_duplicate

    def register(self, name, term, category=None):
        """
        Register a term instance under name.

        The key need not match term.name; one instance may be stored
        under several names.

        Parameters
        ----------
        name : str
            Registry key.
        term : PhysicsTerm
            The term to store.
        category : str, optional
            Aggregation tag. Defaults to term.category.

        Returns
        -------
        PhysicsTerm
            The registered term.

        Raises
        ------
        ValueError
            If name is empty.
        """
        if not name:
            raise ValueError("Cannot register a term without a name")
        if category is None:
            category = term.category

        previous = self._terms.get(name)
        if previous is not None:
            log.warning("Term '%s' registered twice; replacing %r with %r",
                        name, previous, term)
            if self.on_duplicate is not None:
                self.on_duplicate(name, previous, term)

        self._terms[name] = term
        self._categories[name] = category
        return term

    def get(self, name):
        """
        Look up a term by name.

        Returns
        -------
        PhysicsTerm or None
            The term, or None if not registered.
        """
        return self._terms.get(name)

    def category(self, name):
        """Stored category tag for name, or "" if not registered."""
        return self._categories.get(name, "")

    def is_resonance(self, name):
        return self._categories.get(name) == RESONANCE_CATEGORY

    def all_names(self):
        """All term names in registration order."""
        return list(self._terms)

    def names_by_category(self, category):
        """Names registered under category, in registration order."""
        return [name for name in self._terms
                if self._categories[name] == category]

    def categories(self):
        """Distinct categories in order of first registration."""
        seen = []
        for name in self._terms:
            cat = self._categories[name]
            if cat not in seen:
                seen.append(cat)
        return seen

    def count(self):
        return len(self._terms)

    def __len__(self):
        return len(self._terms)

    def __contains__(self, name):
        return name in self._terms

    def list_all(self):
        """
        Return metadata for all registered terms.

        Returns
        -------
        list of dict
            One metadata dict per term, in registration order. The
            category reported is the stored tag.
        """
        result = []
        for name, term in self._terms.items():
            meta = term.metadata()
            meta["name"] = name
            meta["category"] = self._categories[name]
            result.append(meta)
        return result

    def describe(self):
        """
        Human-readable registry listing grouped by category.

        Returns
        -------
        str
        """
        lines = ["Registered physics terms: {}".format(self.count())]
        for cat in self.categories():
            names = self.names_by_category(cat)
            lines.append("")
            lines.append("[{}] ({} terms)".format(cat, len(names)))
            for name in names:
                lines.append("  {:<30s} {}".format(name, self._terms[name].description))
        return "\n".join(lines)


def build_default_registry(on_duplicate=None):
    """
    Build and populate the registry with every built-in term family.

    Returns
    -------
    TermRegistry
    """
    registry = TermRegistry(on_duplicate=on_duplicate)

    for cls in GRAVITY_TERMS:
        registry.register(cls.name, cls())
    registry.register(CompressedMUGE.name, CompressedMUGE())
    registry.register(ResonanceMUGE.name, ResonanceMUGE())
    for term in system_terms():
        registry.register(term.name, term)
    for cls in HELPER_TERMS:
        registry.register(cls.name, cls())
    for cls in COMPRESSED_TERMS:
        registry.register(cls.name, cls())
    for term in resonance_terms():
        registry.register(term.name, term)
    for cls in SOURCE6_TERMS:
        registry.register(cls.name, cls())

    log.info("Registry built with %d terms in %d categories",
             registry.count(), len(registry.categories()))
    return registry
