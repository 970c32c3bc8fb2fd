"""Plan classification: partition resource changes into category buckets and print them."""

from __future__ import annotations

from typing import Iterable

from tfs.categories import COLORS, DIM, ORDER, RESET, Category, categorize, tab_title
from tfs.plan_reader import ResourceChange, parse_plan
from tfs.renderer import render
from tfs.source import DEFAULT_TERRAFORM_BIN, read_plan_json

Buckets = dict[Category, list[ResourceChange]]


def classify(changes: Iterable[ResourceChange]) -> Buckets:
    """Place every change in exactly one category, keeping input order.

    Rules, in order: delete,create -> REPLACE; create -> CREATE;
    delete -> DESTROY; update -> UPDATE; anything else -> OTHER.
    Changes with no actions at all are skipped.
    """
    buckets: Buckets = {category: [] for category in ORDER}
    for rc in changes:
        if not rc.actions:
            continue
        buckets[categorize(rc.actions)].append(rc)
    return buckets


def summarize(buckets: Buckets) -> dict[str, int]:
    """Count changes per category, keyed by lower-case category name."""
    return {category.name.lower(): len(buckets.get(category, [])) for category in ORDER}


def has_changes(buckets: Buckets) -> bool:
    return any(buckets.get(category) for category in ORDER if category != Category.OTHER)


def load_buckets(path: str, terraform_bin: str = DEFAULT_TERRAFORM_BIN) -> Buckets:
    """Read, parse and classify a plan file."""
    return classify(parse_plan(read_plan_json(path, terraform_bin)))


def print_plan(buckets: Buckets, verbose: bool = False) -> None:
    """Print every change's diff block to the console in Terraform-style format."""
    summary = summarize(buckets)

    print(f"\nPlan: {summary['create']} to create, {summary['destroy']} to destroy, "
          f"{summary['replace']} to replace, {summary['update']} to update, "
          f"{summary['other']} other.\n")

    if not has_changes(buckets) and not (verbose and summary["other"]):
        print("No changes. Infrastructure is up-to-date.\n")
        return

    for category in ORDER:
        if category == Category.OTHER and not verbose:
            continue
        changes = buckets.get(category, [])
        if not changes:
            continue
        print(f"{COLORS[category]}{tab_title(category, len(changes))}{RESET}")
        print(f"{DIM}{'-' * 40}{RESET}")
        for rc in changes:
            print(render(rc))
