"""
flowlens Attack Path Explorer - HTML Page Builder

Wraps a rendered SVG scene into a standalone page. The Python core
precomputes every interaction outcome (hover and selection of each node) as
a delta over the idle styles; the embedded script only swaps styles and
panel content, plus d3 pan/zoom.
"""

import json
from html import escape
from typing import Any, Dict, List

from .panel import LegendEntry

# =============================================================================
# CSS ASSETS
# =============================================================================
CSS_CONTENT = """
:root {
    --bg: #020617;
    --panel: rgba(15, 23, 42, 0.95);
    --border: rgba(51, 65, 85, 0.5);
    --text-primary: #f1f5f9;
    --text-secondary: #cbd5e1;
    --text-tertiary: #64748b;
    --danger: #ef4444;
    --danger-bg: rgba(239, 68, 68, 0.1);
    --font-sans: "Inter", -apple-system, BlinkMacSystemFont, "Segoe UI", sans-serif;
    --font-mono: "JetBrains Mono", "SF Mono", monospace;
}

* { box-sizing: border-box; }

body {
    margin: 0;
    height: 100vh;
    background: var(--bg);
    color: var(--text-primary);
    font-family: var(--font-sans);
    overflow: hidden;
}

#canvas { position: absolute; inset: 0; cursor: move; }
#canvas svg { width: 100%; height: 100%; }
.node { cursor: pointer; }
.node text, .link { pointer-events: none; }
.node, .link { transition: opacity 0.3s; }
.node circle { transition: fill 0.3s ease, stroke 0.3s ease; }

.summary {
    position: absolute; top: 16px; left: 50%; transform: translateX(-50%);
    max-width: 640px; font-size: 12px; color: var(--text-secondary);
    background: var(--panel); border: 1px solid var(--border);
    border-radius: 12px; padding: 8px 14px; text-align: center;
}

.detail {
    position: absolute; top: 24px; left: 24px; width: 420px;
    background: var(--panel); border: 1px solid var(--border);
    border-radius: 24px; overflow: hidden; display: none;
}
.detail.visible { display: block; }
.detail-header {
    display: flex; justify-content: space-between; padding: 12px 20px;
    border-bottom: 1px solid var(--border); font-size: 10px;
    text-transform: uppercase; letter-spacing: 0.2em; color: var(--text-tertiary);
}
.detail-body { padding: 20px 24px; max-height: 600px; overflow-y: auto; }
.detail-title { font-size: 22px; font-weight: 700; margin: 0 0 12px; }
.detail-desc { font-size: 14px; color: var(--text-secondary); line-height: 1.5; }
.snippet {
    background: #020617; border: 1px solid #1e293b; border-radius: 12px;
    padding: 12px; font-family: var(--font-mono); font-size: 11px;
    color: #60a5fa; white-space: pre; overflow: auto; max-height: 200px;
}
.banner {
    padding: 10px 24px; background: var(--danger-bg); color: var(--danger);
    font-size: 10px; font-weight: 800; text-transform: uppercase; letter-spacing: 0.2em;
}

.findings {
    position: absolute; top: 24px; right: 24px; width: 320px; display: none;
    background: var(--panel); border: 1px solid rgba(239, 68, 68, 0.4); border-radius: 24px;
}
.findings.visible { display: block; }
.findings h4 {
    margin: 0; padding: 12px 20px; color: var(--danger); font-size: 10px;
    text-transform: uppercase; letter-spacing: 0.15em; border-bottom: 1px solid rgba(239, 68, 68, 0.2);
}
.finding { padding: 14px 20px; font-size: 11px; }
.payload {
    background: #020617; border-left: 2px solid var(--danger); padding: 8px;
    font-family: var(--font-mono); color: #f87171; word-break: break-all;
}
.strategy { color: var(--text-secondary); font-style: italic; border-left: 1px solid #334155; padding-left: 10px; }

.legend {
    position: absolute; bottom: 24px; left: 24px; padding: 16px;
    background: rgba(15, 23, 42, 0.6); border: 1px solid var(--border); border-radius: 16px;
}
.legend h4 { margin: 0 0 8px; font-size: 10px; color: var(--text-tertiary); text-transform: uppercase; }
.legend-item { display: flex; align-items: center; gap: 10px; font-size: 12px; text-transform: capitalize; }
.legend-swatch { width: 12px; height: 12px; border-radius: 4px; }
"""

# =============================================================================
# JS ASSETS
# =============================================================================
JS_CONTENT = """
const Explorer = {
    hoveredId: null,
    selectedId: null,

    activeState() {
        if (this.hoveredId) return STATES.hover[this.hoveredId];
        if (this.selectedId) return STATES.select[this.selectedId];
        return STATES.idle;
    },

    apply() {
        const state = this.activeState();
        d3.selectAll('.node').each(function () {
            const s = state.nodes[this.dataset.id] || STATES.idle.nodes[this.dataset.id];
            const circle = this.querySelector('circle');
            this.setAttribute('opacity', s[0]);
            circle.setAttribute('stroke', s[1]);
            circle.setAttribute('stroke-width', s[2]);
            circle.style.filter = s[3];
        });
        d3.selectAll('.link').each(function () {
            const s = state.links[this.dataset.index] || STATES.idle.links[this.dataset.index];
            this.setAttribute('opacity', s[0]);
            this.setAttribute('stroke', s[1]);
            this.setAttribute('marker-end', `url(#${s[2]})`);
        });
        Panel.render(state.panel);
    }
};

const Panel = {
    escape(text) {
        const div = document.createElement('div');
        div.textContent = text ?? '';
        return div.innerHTML;
    },

    render(panel) {
        const detail = document.getElementById('detail');
        const findings = document.getElementById('findings');
        if (!panel) {
            detail.classList.remove('visible');
            findings.classList.remove('visible');
            return;
        }
        document.getElementById('detail-type').textContent = panel.type;
        document.getElementById('detail-file').textContent = panel.file || '';
        document.getElementById('detail-title').textContent = panel.title;
        document.getElementById('detail-desc').textContent = panel.description;
        const snippet = document.getElementById('detail-snippet');
        snippet.style.display = panel.snippet ? 'block' : 'none';
        snippet.textContent = panel.snippet || '';
        const banner = document.getElementById('detail-banner');
        banner.style.display = panel.banner ? 'block' : 'none';
        banner.textContent = panel.banner || '';
        detail.classList.add('visible');

        if (!panel.findings.length) {
            findings.classList.remove('visible');
            return;
        }
        document.getElementById('findings-list').innerHTML = panel.findings.map(f => `
            <div class="finding">
                ${f.title ? `<strong>${this.escape(f.title)}</strong>` : ''}
                ${f.payload_suggestion ? `<div class="payload">${this.escape(f.payload_suggestion)}</div>` : ''}
                ${f.test_strategy ? `<p class="strategy">${this.escape(f.test_strategy)}</p>` : ''}
            </div>`).join('');
        findings.classList.add('visible');
    }
};

window.onload = function () {
    const svg = d3.select('#canvas svg');
    const viewport = svg.select('g.viewport');
    const initial = viewport.attr('transform');
    svg.call(d3.zoom()
        .scaleExtent([ZOOM.min, ZOOM.max])
        .on('zoom', (event) => viewport.attr('transform', `${event.transform} ${initial}`)));

    d3.selectAll('.node')
        .on('mouseenter', function () { Explorer.hoveredId = this.dataset.id; Explorer.apply(); })
        .on('mouseleave', function () { Explorer.hoveredId = null; Explorer.apply(); })
        .on('click', function (event) {
            event.stopPropagation();
            const id = this.dataset.id;
            Explorer.selectedId = Explorer.selectedId === id ? null : id;
            Explorer.apply();
        });
    svg.on('click', () => { Explorer.selectedId = null; Explorer.apply(); });
    document.getElementById('detail').addEventListener('click', (e) => e.stopPropagation());

    Explorer.hoveredId = INITIAL.hovered;
    Explorer.selectedId = INITIAL.selected;
    Explorer.apply();
};
"""

# =============================================================================
# HTML TEMPLATE
# =============================================================================
HTML_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{title}</title>
    <script src="https://d3js.org/d3.v7.min.js"></script>
    <style>{styles}</style>
</head>
<body>
    <div id="canvas">{svg}</div>

    <div class="summary">{summary}</div>

    <aside class="detail" id="detail">
        <div class="detail-header">
            <span id="detail-type"></span>
            <span id="detail-file"></span>
        </div>
        <div class="detail-body">
            <h3 class="detail-title" id="detail-title"></h3>
            <p class="detail-desc" id="detail-desc"></p>
            <pre class="snippet" id="detail-snippet"></pre>
        </div>
        <div class="banner" id="detail-banner"></div>
    </aside>

    <aside class="findings" id="findings">
        <h4>Security Sandbox</h4>
        <div id="findings-list"></div>
    </aside>

    <div class="legend">
        <h4>Legend</h4>
        {legend}
    </div>

    <script>
        const STATES = {states};
        const ZOOM = {zoom};
        const INITIAL = {initial};
        {scripts}
    </script>
</body>
</html>"""


def _legend_html(entries: List[LegendEntry]) -> str:
    return "\n        ".join(
        f'<div class="legend-item"><span class="legend-swatch" style="background: {e.color}"></span>'
        f"<span>{e.type}</span></div>"
        for e in entries
    )


def _script_json(value: Any) -> str:
    # "</" inside a JSON string would close the <script> element early.
    return json.dumps(value).replace("</", "<\\/")


def build_html(
    svg: str,
    states: Dict[str, Any],
    legend: List[LegendEntry],
    summary: str = "",
    zoom: tuple = (0.1, 4.0),
    hovered: str | None = None,
    selected: str | None = None,
    title: str = "flowlens Attack Path Explorer",
) -> str:
    """Assemble the final HTML using embedded assets."""
    return HTML_TEMPLATE.format(
        title=escape(title),
        styles=CSS_CONTENT,
        svg=svg,
        summary=escape(summary),
        legend=_legend_html(legend),
        states=_script_json(states),
        zoom=_script_json({"min": zoom[0], "max": zoom[1]}),
        initial=_script_json({"hovered": hovered, "selected": selected}),
        scripts=JS_CONTENT,
    )
