"""MetaPost module registry.

Built-in modules are a static, versioned table of read-only constants.
Custom modules are owned by the settings snapshot.  Resolution concatenates
built-ins then customs, keeps the ones whose id is enabled, and joins their
code with a blank line.

Ids listed as enabled but not present in either list are ignored.  The
registry does not validate module contents; registering a custom module with
a non-empty name and code is the caller's job
(:func:`therion_layout.settings.session.add_custom_module`).
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from therion_layout.settings.model import Module

logger = logging.getLogger(__name__)

BUILTIN_MODULES_VERSION = "1"

_SECTION_MARKER = """\
code metapost
def l_section (expr P) =
  T:=identity;
  pickup pencircle scaled 0.5bp;
  draw P withcolor (0.5, 0, 0.5);
  pair p_start, p_end;
  p_start := point 0 of P;
  p_end := point (length P) of P;
  draw (p_start + (5pt,0)) -- (p_start - (5pt,0)) rotated (angle(direction 0 of P)) shifted p_start withcolor (0.5, 0, 0.5);
  draw (p_end + (5pt,0)) -- (p_end - (5pt,0)) rotated (angle(direction (length P) of P)) shifted p_end withcolor (0.5, 0, 0.5);
enddef;
endcode"""

_SAND = """\
code metapost
def a_sand (expr p) =
  T:=identity;
  pickup pencircle scaled 0.1bp;
  path q; q = bbox p;
  picture tmp_pic;
  tmp_pic := image(
    for i = xpart llcorner q step 0.15u until xpart urcorner q:
      for j = ypart llcorner q step 0.15u until ypart urcorner q:
        draw origin shifted ((i,j) randomized 0.12u) withpen pencircle scaled 0.1bp;
      endfor;
    endfor;
  );
  clip tmp_pic to p;
  draw tmp_pic withcolor (0.5, 0.4, 0.2);
enddef;
endcode"""

_FLOWSTONE_WALL = """\
code metapost
def l_u_flowstone (expr P) =
  T:=identity;
  pickup pencircle scaled 0.5bp;
  path Q; Q := P;
  for i=0 step 0.2u until (arclength P):
    pair p_at, d_at;
    p_at := point (arctime i of P) of P;
    d_at := unitvector(direction (arctime i of P) of P) rotated 90;
    draw p_at -- (p_at + d_at * 0.15u) withcolor (0.7, 0.5, 0.2);
  endfor;
  draw P withcolor (0.7, 0.5, 0.2);
enddef;
endcode"""

BUILTIN_MODULES: tuple[Module, ...] = (
    Module(
        id="l_section_marker",
        display_name="Section marker",
        description="Standard cross-section line marker with end ticks.",
        code=_SECTION_MARKER,
    ),
    Module(
        id="a_sand_wiki",
        display_name="Sand (fine pattern)",
        description="Randomly scattered dots for a realistic sand fill.",
        code=_SAND,
    ),
    Module(
        id="l_u_flowstone_wiki",
        display_name="Flowstone wall",
        description="Toothed line for flowstone-covered walls.",
        code=_FLOWSTONE_WALL,
    ),
)


def all_modules(
    builtins: Sequence[Module],
    customs: Sequence[Module],
) -> tuple[Module, ...]:
    """Built-ins followed by customs, each in its own order."""
    return (*builtins, *customs)


def enabled_modules(
    builtins: Sequence[Module],
    customs: Sequence[Module],
    enabled_ids: Iterable[str],
) -> list[Module]:
    """Modules whose id is in *enabled_ids*, in registry order."""
    wanted = set(enabled_ids)
    return [m for m in all_modules(builtins, customs) if m.id in wanted]


def resolve_enabled(
    builtins: Sequence[Module],
    customs: Sequence[Module],
    enabled_ids: Iterable[str],
) -> str:
    """Code of every enabled module, separated by a blank line.

    Returns ``""`` when nothing is enabled.
    """
    modules = enabled_modules(builtins, customs, enabled_ids)
    logger.debug("Resolved %d enabled module(s)", len(modules))
    return "\n\n".join(m.code for m in modules)
