"""
Static page rendering for parsed relic data.

The page is a single HTML file: fixed markup and styles, the dataset
embedded as JSON, and a small controller script. The script keeps all UI
state (active tab, search term, expanded entries) in one object owned by
the controller; view functions are pure and rebuild the content region
from that state and the dataset on every change.
"""

import html
import json
import logging
from typing import Any

from relic_data.config import SourceConfig
from relic_data.grouping import categorize_primes
from relic_data.models import ProducedItem, RelicDocument

log = logging.getLogger(__name__)

PAGE_TITLE = "Warframe Prime Nexus"
SEARCH_DEBOUNCE_MS = 300
POPUP_HIDE_DELAY_MS = 300


def escape_html(text: str) -> str:
    return html.escape(text, quote=True)


def _prime_payload(prime: ProducedItem) -> dict[str, Any]:
    return {
        "name": prime.name,
        "parts": [
            {"part": p.part, "rarity": p.rarity, "relic": p.relic} for p in prime.parts
        ],
    }


def build_page_data(document: RelicDocument, sources: SourceConfig) -> dict[str, Any]:
    """Shape the parsed document into the JSON the page script reads."""
    categorized = categorize_primes(document.primes, sources.frame_parts)

    return {
        "tierOrder": sources.tier_order,
        "primes": {
            "warframes": {
                name: _prime_payload(prime) for name, prime in categorized.warframes.items()
            },
            "weapons": {
                name: _prime_payload(prime) for name, prime in categorized.weapons.items()
            },
        },
        "relics": {
            name: {
                "location": relic.location,
                "rewards": [{"part": r.item, "rarity": r.rarity} for r in relic.rewards],
            }
            for name, relic in document.relics.items()
        },
    }


def embed_json(data: dict[str, Any]) -> str:
    # "</" would let a value close the surrounding <script> element
    return json.dumps(data, ensure_ascii=False).replace("</", "<\\/")


def render_page(document: RelicDocument, sources: SourceConfig | None = None) -> str:
    sources = sources or SourceConfig()
    data = build_page_data(document, sources)

    log.debug(
        "Rendering page: %d warframe(s), %d weapon(s), %d relic(s)",
        len(data["primes"]["warframes"]),
        len(data["primes"]["weapons"]),
        len(data["relics"]),
    )

    title = escape_html(PAGE_TITLE)
    script = (
        # Data goes in last so its values are never treated as placeholders
        _SCRIPT.replace("__SEARCH_DEBOUNCE_MS__", str(SEARCH_DEBOUNCE_MS))
        .replace("__POPUP_HIDE_DELAY_MS__", str(POPUP_HIDE_DELAY_MS))
        .replace("__PAGE_DATA__", embed_json(data))
    )

    return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <link rel="icon" href="https://i.imgur.com/DTf1jQO.png">
    <title>{title}</title>
    <link href="https://fonts.googleapis.com/css2?family=Orbitron:wght@400;700&family=Exo+2:wght@300;500;700&display=swap" rel="stylesheet">
    <style>{_STYLES}</style>
</head>
<body>
    <div class="void-grid"></div>
    <div class="container">
        <div class="header">
            <h1>{title}</h1>
            <p>Prime Tracking by Steins</p>
        </div>

        <div class="search-container">
            <input type="text" id="searchInput" class="search-input"
                placeholder="Scanning for primes..." aria-label="Search input">
        </div>

        <div class="tab-container">
            <button class="tab-button active" data-tab="primes">Primes</button>
            <button class="tab-button" data-tab="relics">Relics</button>
        </div>

        <div id="mainContent"></div>
    </div>

    <div id="relicPopup" class="relic-popup"></div>
    <script>{script}</script>
</body>
</html>
"""


_STYLES = """
    :root {
        --void-primary: #4a69bd;
        --void-accent: #6c5ce7;
        --void-dark: #0a0a12;
        --void-surface: rgba(26, 26, 45, 0.9);
        --void-border: #2a2a4a;
        --void-text: #e0e0ff;
        --void-rare: #ff4757;
        --void-uncommon: #e67e22;
        --void-common: #7f8c8d;
        --void-glow: rgba(108, 92, 231, 0.3);
    }

    * { box-sizing: border-box; margin: 0; padding: 0; font-family: 'Exo 2', sans-serif; }

    body {
        background: var(--void-dark);
        color: var(--void-text);
        min-height: 100vh;
        line-height: 1.6;
        overflow-x: hidden;
    }

    .void-grid {
        position: fixed;
        inset: 0;
        background:
            linear-gradient(45deg, transparent 24%, var(--void-border) 25%,
                var(--void-border) 26%, transparent 27%),
            linear-gradient(-45deg, transparent 24%, var(--void-border) 25%,
                var(--void-border) 26%, transparent 27%);
        background-size: 40px 40px;
        opacity: 0.1;
        z-index: -1;
        animation: gridFlow 40s linear infinite;
    }

    .container { max-width: 1200px; margin: 0 auto; padding: 2rem; }

    .header { text-align: center; padding: 3rem 0; margin-bottom: 3rem; }

    .header h1 {
        font-family: 'Orbitron', sans-serif;
        font-size: 2.5rem;
        text-transform: uppercase;
        letter-spacing: 4px;
        background: linear-gradient(45deg, #fff, var(--void-primary));
        -webkit-background-clip: text;
        -webkit-text-fill-color: transparent;
        margin-bottom: 1rem;
    }

    .search-container { margin: 2rem 0; }

    .search-input {
        width: 100%;
        padding: 1.2rem 2rem;
        background: var(--void-surface);
        border: 2px solid var(--void-border);
        border-radius: 8px;
        color: var(--void-text);
        font-size: 1.1rem;
    }

    .search-input:focus {
        outline: none;
        border-color: var(--void-primary);
        box-shadow: 0 0 20px var(--void-glow);
    }

    .tab-container { display: flex; gap: 1rem; margin-bottom: 2rem; }

    .tab-button {
        flex: 1;
        padding: 1rem;
        background: var(--void-surface);
        border: 1px solid var(--void-border);
        color: var(--void-text);
        cursor: pointer;
        font-weight: 500;
    }

    .tab-button.active {
        background: var(--void-primary);
        border-color: var(--void-primary);
        box-shadow: 0 0 15px var(--void-glow);
    }

    .prime-item {
        background: var(--void-surface);
        border: 1px solid var(--void-border);
        border-radius: 8px;
        margin-bottom: 1rem;
    }

    .prime-header {
        padding: 1.5rem;
        cursor: pointer;
        display: flex;
        justify-content: space-between;
        align-items: center;
        font-weight: 500;
    }

    .prime-content {
        padding: 0 1.5rem 1.5rem;
        display: none;
        border-top: 1px solid var(--void-border);
    }

    .prime-content.active { display: block; }

    .part-list { list-style: none; }

    .part-item {
        padding: 1rem;
        margin: 0.5rem 0;
        background: rgba(255, 255, 255, 0.03);
        border-radius: 6px;
        display: flex;
        align-items: center;
        gap: 1rem;
    }

    .rarity-Rare { color: var(--void-rare); }
    .rarity-Uncommon { color: var(--void-uncommon); }
    .rarity-Common { color: var(--void-common); }

    .category-section {
        margin: 2rem 0;
        padding: 1rem;
        border: 1px solid var(--void-border);
        border-radius: 8px;
    }

    .category-title {
        font-family: 'Orbitron', sans-serif;
        color: var(--void-primary);
        margin-bottom: 1rem;
        text-transform: uppercase;
        letter-spacing: 2px;
    }

    .relic-hover {
        cursor: pointer;
        border-bottom: 1px dotted var(--void-primary);
    }

    .relic-hover:hover { color: var(--void-accent); }

    .relic-popup {
        position: fixed;
        right: 20px;
        top: 50%;
        transform: translateY(-50%);
        background: var(--void-surface);
        border: 1px solid var(--void-primary);
        border-radius: 8px;
        padding: 1.5rem;
        box-shadow: 0 0 30px var(--void-glow);
        z-index: 1000;
        width: 400px;
        max-height: 80vh;
        overflow-y: auto;
        display: none;
    }

    .no-results { padding: 2rem; text-align: center; font-style: italic; }

    @keyframes gridFlow {
        0% { background-position: 0 0; }
        100% { background-position: 1000px 1000px; }
    }

    @media (max-width: 768px) {
        .header h1 { font-size: 2rem; }
        .prime-header { padding: 1rem; }
        .relic-popup { width: 90%; left: 50%; right: auto; transform: translate(-50%, -50%); }
    }
"""


_SCRIPT = """
const DATA = __PAGE_DATA__;

const utils = {
    debounce(func, wait) {
        let timeout;
        return (...args) => {
            clearTimeout(timeout);
            timeout = setTimeout(() => func(...args), wait);
        };
    },

    escapeHtml(unsafe) {
        return String(unsafe)
            .replace(/&/g, '&amp;')
            .replace(/</g, '&lt;')
            .replace(/>/g, '&gt;')
            .replace(/"/g, '&quot;')
            .replace(/'/g, '&#039;');
    },

    tierRank(relic) {
        const rank = DATA.tierOrder.indexOf(relic.split(' ')[0]);
        return rank === -1 ? DATA.tierOrder.length : rank;
    },

    sortRelics(relics) {
        return [...new Set(relics.filter(Boolean))].sort(
            (a, b) => utils.tierRank(a) - utils.tierRank(b) || a.localeCompare(b)
        );
    },

    groupParts(parts) {
        const grouped = new Map();
        parts.forEach(p => {
            if (!p.part) return;
            const key = p.part + '|' + (p.rarity || '');
            if (!grouped.has(key)) {
                grouped.set(key, { part: p.part, rarity: p.rarity || '', relics: [] });
            }
            grouped.get(key).relics.push(p.relic);
        });
        return Array.from(grouped.values()).map(g => ({ ...g, relics: utils.sortRelics(g.relics) }));
    },

    matches(text, term) {
        return Boolean(text) && text.toLowerCase().includes(term);
    },

    filterEntries(items, term) {
        const entries = Object.entries(items || {});
        if (!term) return entries;
        term = term.toLowerCase();
        return entries.filter(([name, info]) =>
            utils.matches(name, term) ||
            (info.parts || info.rewards || []).some(p =>
                utils.matches(p.part, term) || utils.matches(p.relic, term)
            )
        );
    }
};

// Pure renderers: (state, data) -> markup
const view = {
    expander(state, name) {
        return state.expanded.has(name) ? '\\u25BC' : '\\u25B6';
    },

    relicLink(name) {
        const safe = utils.escapeHtml(name);
        return `<span class="relic-hover" data-relic="${safe}">${safe}</span>`;
    },

    primeItem(state, name, info) {
        const open = state.expanded.has(name);
        const parts = utils.groupParts(info.parts || []).map(p => `
            <li class="part-item">
                <span class="rarity-${utils.escapeHtml(p.rarity)}">${utils.escapeHtml(p.part)}</span>
                <span>\\u2192</span>
                <span class="part-link">${p.relics.map(view.relicLink).join(' &gt; ')}</span>
            </li>`).join('');
        return `
            <div class="prime-item">
                <div class="prime-header" data-toggle="${utils.escapeHtml(name)}">
                    <span>${utils.escapeHtml(name)}</span>
                    <span>${view.expander(state, name)}</span>
                </div>
                <div class="prime-content ${open ? 'active' : ''}">
                    <ul class="part-list">${parts}</ul>
                </div>
            </div>`;
    },

    primes(state, data) {
        const category = (key, title) => {
            const filtered = utils.filterEntries(data.primes[key], state.searchTerm);
            if (!filtered.length) return '';
            return `
                <div class="category-section">
                    <h3 class="category-title">${title}</h3>
                    ${filtered.map(([name, info]) => view.primeItem(state, name, info)).join('')}
                </div>`;
        };
        const content = category('warframes', 'Prime Warframes') + category('weapons', 'Prime Weapons');
        return content || '<div class="no-results">No primes found matching your search</div>';
    },

    rewardList(rewards) {
        return (rewards || []).map(r => `
            <li class="part-item">
                <span class="rarity-${utils.escapeHtml(r.rarity)}">${utils.escapeHtml(r.part || '')}</span>
            </li>`).join('');
    },

    relics(state, data) {
        const filtered = utils.filterEntries(data.relics, state.searchTerm);
        if (!filtered.length) return '<div class="no-results">No relics found in current void cycle</div>';
        return filtered.map(([name, info]) => `
            <div class="prime-item">
                <div class="prime-header" data-toggle="${utils.escapeHtml(name)}">
                    <span>${utils.escapeHtml(name)}</span>
                    <span>${view.expander(state, name)}</span>
                </div>
                <div class="prime-content ${state.expanded.has(name) ? 'active' : ''}">
                    <div class="location">Void Location: ${utils.escapeHtml(info.location || 'Unknown')}</div>
                    <ul class="part-list">${view.rewardList(info.rewards)}</ul>
                </div>
            </div>`).join('');
    },

    relicPopup(data, name) {
        const relic = data.relics[name];
        if (!relic) return '<p>Relic information not found</p>';
        return `
            <h3>${utils.escapeHtml(name)}</h3>
            <div class="location">${utils.escapeHtml(relic.location || 'Unknown location')}</div>
            <ul class="part-list">${view.rewardList(relic.rewards)}</ul>`;
    },

    content(state, data) {
        return state.tab === 'primes' ? view.primes(state, data) : view.relics(state, data);
    }
};

const controller = {
    state: { tab: 'primes', searchTerm: '', expanded: new Set() },
    popupTimeout: null,
    popupHovered: false,

    init() {
        const search = document.getElementById('searchInput');
        const popup = document.getElementById('relicPopup');
        const main = document.getElementById('mainContent');

        search.addEventListener('input', utils.debounce(e => {
            controller.state.searchTerm = e.target.value;
            controller.render();
        }, __SEARCH_DEBOUNCE_MS__));

        document.querySelectorAll('.tab-button').forEach(btn => {
            btn.addEventListener('click', e => controller.switchTab(e.currentTarget));
        });

        main.addEventListener('click', e => {
            const relic = e.target.closest('.relic-hover');
            if (relic) {
                controller.showRelicPopup(relic.dataset.relic);
                return;
            }
            const header = e.target.closest('[data-toggle]');
            if (header) controller.toggleItem(header.dataset.toggle);
        });
        main.addEventListener('mouseover', e => {
            const relic = e.target.closest('.relic-hover');
            if (relic) controller.showRelicPopup(relic.dataset.relic);
        });
        main.addEventListener('mouseout', e => {
            if (e.target.closest('.relic-hover')) controller.hideRelicPopupWithDelay();
        });

        document.addEventListener('click', e => {
            if (!e.target.closest('.relic-hover') && !e.target.closest('#relicPopup')) {
                controller.hideRelicPopup();
            }
        });
        popup.addEventListener('mouseover', () => {
            clearTimeout(controller.popupTimeout);
            controller.popupHovered = true;
        });
        popup.addEventListener('mouseout', () => controller.hideRelicPopupWithDelay());

        controller.render();
    },

    render() {
        document.getElementById('mainContent').innerHTML = view.content(controller.state, DATA);
    },

    switchTab(button) {
        document.querySelectorAll('.tab-button').forEach(b => b.classList.remove('active'));
        button.classList.add('active');
        document.getElementById('searchInput').value = '';
        controller.state = { tab: button.dataset.tab, searchTerm: '', expanded: new Set() };
        controller.hideRelicPopup();
        controller.render();
    },

    toggleItem(name) {
        const expanded = controller.state.expanded;
        expanded.has(name) ? expanded.delete(name) : expanded.add(name);
        controller.render();
    },

    showRelicPopup(name) {
        clearTimeout(controller.popupTimeout);
        controller.popupHovered = true;
        const popup = document.getElementById('relicPopup');
        popup.innerHTML = view.relicPopup(DATA, name);
        popup.style.display = 'block';
    },

    hideRelicPopupWithDelay() {
        controller.popupHovered = false;
        clearTimeout(controller.popupTimeout);
        controller.popupTimeout = setTimeout(() => {
            if (!controller.popupHovered) controller.hideRelicPopup();
        }, __POPUP_HIDE_DELAY_MS__);
    },

    hideRelicPopup() {
        clearTimeout(controller.popupTimeout);
        controller.popupHovered = false;
        document.getElementById('relicPopup').style.display = 'none';
    }
};

document.addEventListener('DOMContentLoaded', () => controller.init());
"""
