"""Payroll over an org chart: a custom visitor, no changes to the node types.

Run: python examples/org_payroll.py
"""

from canopy import Composite, Leaf, Printer, SizeCalculator, Visitor, run_visitor
from canopy.utils.logging import show_tree


def team(lead: str, salary: int, *reports):
    # a manager is a composite whose first child is their own salary
    return Composite(lead, [Leaf("salary", salary), *reports])


class Headcount(Visitor):  # noqa: D101
    def reset(self):
        self.people = 0

    def visit_leaf(self, leaf):
        if leaf.name == "salary":
            self.people += 1

    def visit_composite(self, composite):
        self.visit_children(composite)

    def result(self):
        return self.people


ceo = team(
    "Alice (CEO)", 200_000,
    team("Bob (CTO)", 150_000, team("Charlie", 120_000), team("Diana", 90_000)),
    team("Eve (CFO)", 150_000, team("Frank", 70_000)),
)

if __name__ == "__main__":
    show_tree(ceo)
    run_visitor(ceo, Printer(leaf_template="${{ value }}", with_totals=True,
                             composite_template="{{ name }} – team cost ${{ value }}", sink=print))
    print("Total payroll:", run_visitor(ceo, SizeCalculator()))
    print("Headcount:", run_visitor(ceo, Headcount()))
