"""Build ordering for a batch of source packages.

Sources are ordered by their Build-Depends, Build-Depends-Arch and Build-Depends-Indep: if
source B build-depends on a binary package produced by source A in the same batch, A is built
first. Dependencies on anything not produced inside the batch are ignored.
"""

import logging
from collections.abc import Iterable

from debsrc.graph import Network
from debsrc.models import Arch, Dsc, Possibility

logger = logging.getLogger(__name__)


def binary_source_index(dscs: Iterable[Dsc]) -> dict[str, str]:
    """Map every binary package name to the source producing it.

    When two sources claim the same binary the last one wins; the clash is logged.
    """
    index: dict[str, str] = {}
    for dsc in dscs:
        for binary in dsc.binaries:
            previous = index.get(binary)
            if previous is not None and previous != dsc.source:
                logger.warning(f"Binary {binary!r} is built by both {previous!r} and {dsc.source!r}, using the latter")
            index[binary] = dsc.source
    return index


def concrete_build_depends(dsc: Dsc, arch: Arch) -> list[Possibility]:
    """All build dependencies of `dsc` that apply when building on `arch`."""
    return [
        *dsc.build_depends.get_possibilities(arch),
        *dsc.build_depends_arch.get_possibilities(arch),
        *dsc.build_depends_indep.get_possibilities(arch),
    ]


def build_network(dscs: list[Dsc], arch: Arch) -> Network[Dsc]:
    """Build the source -> source "builds before" graph for a batch."""
    sources = binary_source_index(dscs)
    network: Network[Dsc] = Network()
    for dsc in dscs:
        network.add_node(dsc.source, dsc)

    for dsc in dscs:
        for relation in concrete_build_depends(dsc, arch):
            provider = sources.get(relation.name)
            if provider is None or provider == dsc.source:
                continue
            network.add_edge(provider, dsc.source)
    return network


def order_dsc_for_build(dscs: list[Dsc], arch: Arch | str) -> list[Dsc]:
    """Sort a batch of .dsc files topologically by build order.

    Unrelated sources keep their relative order from `dscs`. The returned objects are the
    ones passed in.

    Raises:
        CycleDetected: the sources build-depend on each other in a loop
        ValueError: two descriptors share a Source name
    """
    if isinstance(arch, str):
        arch = Arch.parse(arch)

    network = build_network(dscs, arch)
    ordered = [node.value for node in network.sort()]
    logger.debug(f"Build order for {arch}: {', '.join(dsc.source for dsc in ordered)}")
    return ordered
