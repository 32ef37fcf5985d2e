"""
Visualization and reporting utilities.
"""

from .reduction.trace import ReductionTrace


def print_trace(trace: ReductionTrace):
    """Print every step of a reduction."""
    print(f"\n{'='*60}")
    print(f"Reduction of {trace.initial.name}")
    print(f"{'='*60}")
    for i, step in enumerate(trace.steps, 1):
        rule = step.rule
        inner = step.innermost().rule
        if inner != rule:
            rule = f"{rule}/{inner}"
        print(f"  Step {i}: [{rule}] {step.after.name}")
    if trace.normalized:
        print(f"  Normal form: {trace.final.name} ({trace.length} steps)")
    else:
        print(f"  (not normalized after {trace.length} steps)")


def print_certificate(certificate: dict):
    """Print a NormalFormVerifier certificate."""
    status = "VERIFIED" if certificate["verified"] else "REJECTED"
    print(f"\n{'='*60}")
    print(f"NF certificate: {certificate['term']} ⇓ {certificate['claimed']} [{status}]")
    print(f"{'='*60}")
    for line in certificate["trace"]:
        print(f"  {line}")
    print(f"  Actual normal form: {certificate['actual']} ({certificate['steps']} steps)")


def print_strong_normalization(report):
    """Print the size sequence of a strong normalization report."""
    sizes = " > ".join(str(s) for s in report.sizes)
    print(f"\n  {report.term}")
    print(f"    sizes: {sizes}")
    if report.verified:
        print(f"    strictly decreasing over {report.steps} steps -> {report.normal_form}")
    else:
        print(f"    NOT strictly decreasing at steps {report.violations}")


def print_confluence(results: dict):
    """Print the output of check_local_confluence."""
    print(f"\n{'='*60}")
    print("Local confluence")
    print(f"{'='*60}")
    for case in results["cases"]:
        mark = "ok" if case["confluent"] else "DIVERGES"
        print(f"  [{mark}] {case['term']}")
        for nf in case["normal_forms"]:
            print(f"         -> {nf}")
    verdict = "all confluent" if results["all_confluent"] else "NOT confluent"
    print(f"  {len(results['cases'])} terms: {verdict}")


def print_semantic_check(check):
    """Print an operational/denotational comparison."""
    print(f"\n  {check.term}")
    print(f"    operational:  {check.operational}")
    print(f"    denotational: {check.denotational}")
    if not check.comparable:
        print("    (not comparable)")
    else:
        print(f"    {'agree' if check.equivalent else 'DISAGREE'}")


def trace_to_dot(trace: ReductionTrace) -> str:
    """The terms of a reduction as a Graphviz digraph, one edge per step."""
    lines = [
        "digraph reduction {",
        "  rankdir=TB;",
        "  node [shape=box, style=rounded];",
    ]
    for i, term in enumerate(trace.terms):
        label = term.name.replace('"', '\\"')
        color = "lightblue" if i == len(trace.terms) - 1 and trace.normalized else "lightgray"
        lines.append(f'  t{i} [label="{label}", fillcolor={color}, style=filled];')
    for i, step in enumerate(trace.steps):
        lines.append(f'  t{i} -> t{i + 1} [label="{step.rule}"];')
    lines.append("}")
    return "\n".join(lines) + "\n"


def export_dot(trace: ReductionTrace, path="reduction.dot"):
    """Write trace_to_dot(trace) to a DOT file for Graphviz."""
    with open(path, "w") as f:
        f.write(trace_to_dot(trace))
    print(f"Graph exported to {path}")
