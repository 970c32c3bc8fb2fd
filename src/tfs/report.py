"""Static HTML report: the same categories and diff lines as the terminal viewer, as markup."""

from __future__ import annotations

import html
from string import Template

from tfs.categories import CSS_KEYS, HTML_COLORS, ORDER, Category, tab_title
from tfs.differ import DiffLine
from tfs.planner import Buckets
from tfs.renderer import render_lines

DEFAULT_TITLE = "Terraform Plan Analysis"
EMPTY_MESSAGE = "No changes in this category."

_PAGE = Template("""<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="UTF-8">
<meta name="viewport" content="width=device-width, initial-scale=1.0">
<title>$title</title>
<style>
:root {
  --bg-color: #1a1b26;
  --text-color: #a9b1d6;
  --sidebar-bg: #16161e;
  --border-color: #414868;
  --accent-color: #7aa2f7;
$color_vars}
body { margin: 0; font-family: 'Segoe UI', Tahoma, sans-serif; background: var(--bg-color);
  color: var(--text-color); height: 100vh; display: flex; flex-direction: column; overflow: hidden; }
.header { background: var(--sidebar-bg); border-bottom: 1px solid var(--border-color);
  padding: 0 10px; display: flex; align-items: flex-end; user-select: none; }
.tab { padding: 8px 16px; cursor: pointer; font-weight: bold; font-size: 14px; margin-right: 2px;
  border-top-left-radius: 4px; border-top-right-radius: 4px; }
.tab.active { color: #FAFAFA; }
$tab_rules.container { display: flex; flex: 1; overflow: hidden; }
.sidebar { width: 350px; background: var(--sidebar-bg); border-right: 1px solid var(--border-color);
  overflow-y: auto; flex-shrink: 0; }
.resource-item { padding: 10px 15px; cursor: pointer; white-space: nowrap; overflow: hidden;
  text-overflow: ellipsis; font-size: 14px; border-bottom: 1px solid rgba(65, 72, 104, 0.3); }
.resource-item.selected { background: rgba(122, 162, 247, 0.15); border-left: 3px solid var(--accent-color);
  padding-left: 12px; }
.detail-view { flex: 1; padding: 20px; overflow-y: auto; font-family: Consolas, Monaco, monospace;
  font-size: 14px; line-height: 1.5; }
.diff-line { white-space: pre; }
.diff-bold { font-weight: bold; margin-bottom: 10px; }
$line_rules.empty-state { padding: 40px; text-align: center; color: var(--border-color); }
[hidden] { display: none !important; }
</style>
</head>
<body>
<div class="header">
$tabs</div>
<div class="container">
$lists<div class="detail-view">
<div class="empty-state" id="placeholder">Select a resource to view details</div>
$details</div>
</div>
<script>
function showTab(cat) {
  document.querySelectorAll('.tab').forEach(function (el) {
    el.classList.toggle('active', el.dataset.category === cat);
  });
  document.querySelectorAll('.sidebar').forEach(function (el) {
    el.hidden = el.dataset.category !== cat;
  });
  showResource(null);
}
function showResource(id) {
  document.querySelectorAll('.resource-item').forEach(function (el) {
    el.classList.toggle('selected', el.dataset.target === id);
  });
  document.querySelectorAll('.resource-detail').forEach(function (el) {
    el.hidden = el.id !== id;
  });
  document.getElementById('placeholder').hidden = id !== null;
}
document.querySelectorAll('.tab').forEach(function (el) {
  el.onclick = function () { showTab(el.dataset.category); };
});
document.querySelectorAll('.resource-item').forEach(function (el) {
  el.onclick = function () { showResource(el.dataset.target); };
});
</script>
</body>
</html>
""")


def _line_html(line: DiffLine) -> str:
    classes = ["diff-line"]
    if line.style is not None:
        classes.append(f"diff-{CSS_KEYS[line.style]}")
    if line.bold:
        classes.append("diff-bold")
    return f'<div class="{" ".join(classes)}">{html.escape(line.text)}</div>\n'


def _resource_id(category: Category, index: int) -> str:
    return f"r-{int(category)}-{index}"


def _tabs(buckets: Buckets) -> str:
    out = []
    for category in ORDER:
        active = " active" if category == ORDER[0] else ""
        title = html.escape(tab_title(category, len(buckets.get(category, []))))
        out.append(
            f'<div class="tab tab-{CSS_KEYS[category]}{active}" '
            f'data-category="{int(category)}">{title}</div>\n'
        )
    return "".join(out)


def _lists(buckets: Buckets) -> str:
    out = []
    for category in ORDER:
        hidden = "" if category == ORDER[0] else " hidden"
        out.append(f'<div class="sidebar" data-category="{int(category)}"{hidden}>\n')
        changes = buckets.get(category, [])
        if not changes:
            out.append(f'<div class="empty-state">{EMPTY_MESSAGE}</div>\n')
        for i, rc in enumerate(changes):
            address = html.escape(rc.address)
            out.append(
                f'<div class="resource-item" data-target="{_resource_id(category, i)}" '
                f'title="{address}">{address}</div>\n'
            )
        out.append("</div>\n")
    return "".join(out)


def _details(buckets: Buckets) -> str:
    out = []
    for category in ORDER:
        for i, rc in enumerate(buckets.get(category, [])):
            out.append(f'<div class="resource-detail" id="{_resource_id(category, i)}" hidden>\n')
            out.extend(_line_html(line) for line in render_lines(rc))
            out.append("</div>\n")
    return "".join(out)


def render_report(buckets: Buckets, title: str = DEFAULT_TITLE) -> str:
    """Render the whole plan as a self-contained HTML document.

    Output depends only on the buckets and title, so the same plan always
    yields byte-identical markup.
    """
    color_vars = "".join(
        f"  --{CSS_KEYS[c]}-color: {HTML_COLORS[c]};\n" for c in ORDER
    )
    tab_rules = "".join(
        f".tab-{CSS_KEYS[c]} {{ color: var(--{CSS_KEYS[c]}-color); }}\n"
        f".tab-{CSS_KEYS[c]}.active {{ background: var(--{CSS_KEYS[c]}-color); color: #FAFAFA; }}\n"
        for c in ORDER
    )
    line_rules = "".join(
        f".diff-{CSS_KEYS[c]} {{ color: var(--{CSS_KEYS[c]}-color); }}\n" for c in ORDER
    )
    return _PAGE.substitute(
        title=html.escape(title),
        color_vars=color_vars,
        tab_rules=tab_rules,
        line_rules=line_rules,
        tabs=_tabs(buckets),
        lists=_lists(buckets),
        details=_details(buckets),
    )


def write_report(buckets: Buckets, path: str, title: str = DEFAULT_TITLE) -> str:
    """Write the HTML report to path and return the path."""
    data = render_report(buckets, title).encode("utf-8")
    with open(path, "wb") as f:
        f.write(data)
    return path
