# ui_frontend.py
# Watchboard - UI Frontend Registration
# Copyright (c) 2025-2026 CrossWatch / Cenodude (https://github.com/cenodude/CrossWatch)
from __future__ import annotations

from fastapi import FastAPI
from fastapi.responses import HTMLResponse, Response

from wb_platform import CURRENT_VERSION

__all__ = ["register_favicons", "register_ui_root", "get_index_html"]

# Static favicon
FAVICON_SVG: str = """<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 64 64">
<defs><linearGradient id="g" x1="0" y1="0" x2="64" y2="64" gradientUnits="userSpaceOnUse">
<stop offset="0" stop-color="#2de2ff"/><stop offset="0.5" stop-color="#7c5cff"/><stop offset="1" stop-color="#ff7ae0"/></linearGradient></defs>
<rect width="64" height="64" rx="14" fill="#0b0b0f"/>
<rect x="10" y="12" width="19" height="18" rx="4" fill="none" stroke="url(#g)" stroke-width="3"/>
<rect x="35" y="12" width="19" height="18" rx="4" fill="none" stroke="url(#g)" stroke-width="3"/>
<rect x="10" y="34" width="19" height="18" rx="4" fill="none" stroke="url(#g)" stroke-width="3"/>
<rect x="35" y="34" width="19" height="18" rx="4" fill="url(#g)"/>
</svg>"""


def register_favicons(app: FastAPI) -> None:
    def _svg_resp() -> Response:
        return Response(
            content=FAVICON_SVG,
            media_type="image/svg+xml",
            headers={"Cache-Control": "public, max-age=86400"},
        )

    @app.get("/favicon.svg", include_in_schema=False, tags=["ui"])
    def favicon_svg() -> Response:
        return _svg_resp()

    @app.get("/favicon.ico", include_in_schema=False, tags=["ui"])
    def favicon_ico() -> Response:
        # serve SVG for legacy path
        return _svg_resp()


def register_ui_root(app: FastAPI) -> None:
    @app.get("/", include_in_schema=False, tags=["ui"])
    def ui_root() -> HTMLResponse:
        return HTMLResponse(get_index_html(), headers={"Cache-Control": "no-store"})


def get_index_html() -> str:
    return _INDEX_HTML.replace("__VERSION__", CURRENT_VERSION)


# Browser side of services.add_panel / services.edit_panel; keep behavior in step with them.
_INDEX_HTML = r"""<!doctype html><html lang="en"><head>
<meta charset="utf-8"><meta name="viewport" content="width=device-width,initial-scale=1">
<title>Watchboard</title>
<link rel="icon" type="image/svg+xml" href="/favicon.svg"><link rel="alternate icon" href="/favicon.ico">
<style>
  :root{--bg:#000;--panel:#0b0b0f;--muted:#9aa4b2;--fg:#f2f4f8;--border:#1a1a24;--accent:#7c5cff;--danger:#ff4d4f}
  *{box-sizing:border-box}
  body{margin:0;display:flex;min-height:100vh;background:radial-gradient(1200px 600px at 20% -10%,#15152544,transparent),var(--bg);color:var(--fg);font:14px/1.5 ui-sans-serif,system-ui,Segoe UI,Roboto}
  aside{width:320px;flex:0 0 320px;padding:24px;border-right:1px solid var(--border);background:var(--panel);display:flex;flex-direction:column;gap:16px;position:sticky;top:0;height:100vh;overflow-y:auto}
  aside.closed{display:none}
  #toggle{position:fixed;top:12px;left:12px;z-index:20}
  h1{margin:32px 0 0;font-size:22px}
  input,select,textarea{width:100%;padding:8px 10px;border-radius:10px;border:1px solid var(--border);background:#0e0e15;color:var(--fg)}
  button{padding:8px 12px;border-radius:10px;border:1px solid var(--border);background:#0b0b16;color:var(--fg);cursor:pointer}
  button.on{background:#ffffff33}
  .row{display:flex;gap:8px}.row>*{flex:1}
  .muted{color:var(--muted);font-size:12px}
  .results{border:1px solid var(--border);border-radius:10px;max-height:260px;overflow-y:auto}
  .result{display:flex;gap:10px;padding:8px;cursor:pointer;border-bottom:1px solid var(--border)}
  .result:hover{background:#ffffff12}.result img{width:40px;height:56px;object-fit:cover;border-radius:4px}
  main{flex:1;padding:32px;display:grid;grid-template-columns:1fr 1fr;gap:24px;align-content:start}
  .col{background:var(--panel);border:1px solid var(--border);border-radius:14px;padding:16px}
  .col header{display:flex;justify-content:space-between;align-items:center;margin-bottom:12px}
  .col h2{margin:0;font-size:18px}
  .filters button{padding:2px 10px;font-size:12px}
  .grid{display:grid;grid-template-columns:repeat(4,1fr);gap:12px;min-height:200px;padding:6px;border-radius:10px}
  .grid.over{background:#ffffff0d}
  .card{position:relative;border-radius:10px;overflow:hidden;cursor:pointer;aspect-ratio:2/3;background:#111}
  .card img{width:100%;height:100%;object-fit:cover}
  .card .score{position:absolute;top:6px;right:6px;background:#000c;padding:2px 6px;border-radius:6px;font-weight:700;font-size:12px}
  .card .cap{position:absolute;left:0;right:0;bottom:0;padding:6px;background:linear-gradient(0deg,#000e,transparent);font-size:12px}
  .empty{grid-column:1/-1;text-align:center;color:#ffffff4d;padding:48px 0}
  #modal{position:fixed;inset:0;background:#0009;display:none;align-items:center;justify-content:center;z-index:30}
  #modal.open{display:flex}
  #modal .box{background:var(--panel);border:1px solid var(--border);border-radius:18px;padding:24px;width:420px;display:flex;flex-direction:column;gap:12px}
  #modal img{width:160px;height:240px;object-fit:cover;border-radius:10px;align-self:center}
  .scores{display:flex;gap:4px}.scores button{flex:1;padding:6px 0}
  .danger{background:#ff4d4f33;color:#ffb3b3}
</style></head><body>
<button id="toggle" title="Toggle sidebar">&#9776;</button>
<aside id="sidebar">
  <h1>Watchlist</h1>
  <div class="row"><button id="mode-search" class="on">Search</button><button id="mode-manual">Manual</button></div>
  <div id="search-box"><input id="query" placeholder="Search movies &amp; shows..." autocomplete="off"><div id="results" class="results" hidden></div></div>
  <div id="manual-box" hidden><input id="m-title" placeholder="Title"><div style="height:8px"></div><input id="m-poster" placeholder="Poster URL (optional)"></div>
  <div class="row">
    <label><span class="muted">Type</span><select id="type"><option value="movie">Movie</option><option value="tv">TV Show</option></select></label>
    <label><span class="muted">Add to</span><select id="category"><option value="planning">Planning</option><option value="watching">Watching</option><option value="watched">Watched</option><option value="dropped">Dropped</option></select></label>
  </div>
  <button id="add">Add to Watchlist</button>
  <hr style="border-color:var(--border);width:100%">
  <button id="export">Export</button>
  <button id="import">Import</button>
  <input id="import-file" type="file" accept=".json" hidden>
  <div class="muted" style="margin-top:auto;text-align:center">Watchboard v__VERSION__</div>
</aside>
<main id="board"></main>
<div id="modal"><div class="box">
  <div class="row" style="justify-content:space-between"><h2 style="margin:0;flex:0">Edit</h2><button id="close" style="flex:0">&times;</button></div>
  <img id="e-img" alt="">
  <label class="muted">Title</label><input id="e-title">
  <label class="muted">Poster URL</label><input id="e-poster">
  <label class="muted">Score</label><div id="e-scores" class="scores"></div>
  <label class="muted">Notes</label><textarea id="e-notes" rows="3" placeholder="Add your thoughts..."></textarea>
  <button id="e-delete" class="danger">Delete</button>
</div></div>
<script>
(() => {
  const $ = (id) => document.getElementById(id);
  const esc = (s) => String(s ?? "").replace(/[&<>"']/g, (c) => ({"&":"&amp;","<":"&lt;",">":"&gt;",'"':"&quot;","'":"&#39;"}[c]));
  const sid = Math.random().toString(36).slice(2);
  const filters = {watching:"all", planning:"all", watched:"all", dropped:"all"};
  let cfg = {search:{debounce_ms:300, min_query_length:3}};
  let manual = false, timer = null, editing = null, editScore = null;

  async function api(path, opts) {
    const r = await fetch(path, Object.assign({headers:{"Content-Type":"application/json"}}, opts || {}));
    const body = await r.json().catch(() => ({}));
    if (!r.ok) throw new Error(body.detail || r.statusText);
    return body;
  }

  async function render() {
    const qs = new URLSearchParams(filters).toString();
    const data = await api("/api/board?" + qs);
    $("board").innerHTML = data.columns.map((c) => `
      <section class="col"><header><h2>${esc(c.title)}</h2><div class="filters">
        ${["all","movie","tv"].map((f) => `<button data-cat="${c.id}" data-f="${f}" class="${c.filter===f?"on":""}">${f==="all"?"All":f==="movie"?"Movies":"TV"}</button>`).join("")}
      </div></header>
      <div class="grid" data-drop="${c.id}">
        ${c.items.map((it) => `<div class="card" draggable="true" data-id="${esc(it.id)}">
          <img src="${esc(it.poster)}" alt="${esc(it.title)}">
          ${it.score ? `<div class="score">${it.score}/10</div>` : ""}
          <div class="cap">${esc(it.title)}${it.notes ? `<div class="muted">${esc(it.notes)}</div>` : ""}</div></div>`).join("")}
        ${c.items.length ? "" : `<div class="empty">No items</div>`}
      </div></section>`).join("");
  }

  $("board").addEventListener("click", (e) => {
    const fb = e.target.closest("button[data-f]");
    if (fb) { filters[fb.dataset.cat] = fb.dataset.f; render(); return; }
    const card = e.target.closest(".card");
    if (card) openEdit(card.dataset.id);
  });
  $("board").addEventListener("dragstart", (e) => {
    const card = e.target.closest(".card");
    if (card) e.dataTransfer.setData("text/plain", card.dataset.id);
  });
  $("board").addEventListener("dragover", (e) => {
    const g = e.target.closest("[data-drop]");
    if (g) { e.preventDefault(); g.classList.add("over"); }
  });
  $("board").addEventListener("dragleave", (e) => {
    const g = e.target.closest("[data-drop]");
    if (g) g.classList.remove("over");
  });
  $("board").addEventListener("drop", async (e) => {
    const g = e.target.closest("[data-drop]");
    if (!g) return;
    e.preventDefault();
    const id = e.dataTransfer.getData("text/plain");
    await api(`/api/items/${encodeURIComponent(id)}/move`, {method:"POST", body:JSON.stringify({category:g.dataset.drop})});
    render();
  });

  function setManual(on) {
    manual = on;
    $("mode-search").classList.toggle("on", !on);
    $("mode-manual").classList.toggle("on", on);
    $("search-box").hidden = on;
    $("manual-box").hidden = !on;
    onQuery();
  }
  function showResults(list) {
    const box = $("results");
    box.hidden = !list.length;
    box.innerHTML = list.map((r, i) => `<div class="result" data-i="${i}">
      ${r.poster ? `<img src="${esc(r.poster)}" alt="">` : ""}
      <div><div>${esc(r.title)}</div><div class="muted">${r.type==="movie"?"Movie":"TV Show"}${r.year?" &bull; "+esc(r.year):""}</div></div></div>`).join("");
    box.onclick = (e) => {
      const row = e.target.closest(".result");
      if (!row) return;
      const r = list[+row.dataset.i];
      $("query").value = r.title;
      $("m-title").value = r.title;
      $("m-poster").value = r.poster;
      $("type").value = r.type;
      box.hidden = true;
    };
  }
  function onQuery() {
    clearTimeout(timer);
    const q = $("query").value;
    if (manual || q.length < cfg.search.min_query_length) { showResults([]); return; }
    timer = setTimeout(async () => {
      const data = await api(`/api/search?q=${encodeURIComponent(q)}&sid=${sid}`);
      if (!data.stale && !manual && q === $("query").value) showResults(data.results);
    }, cfg.search.debounce_ms);
  }
  $("query").addEventListener("input", onQuery);
  $("mode-search").onclick = () => setManual(false);
  $("mode-manual").onclick = () => setManual(true);
  $("add").onclick = async () => {
    const title = manual ? $("m-title").value : $("query").value;
    if (!title.trim()) return;
    await api("/api/items", {method:"POST", body:JSON.stringify({
      title, poster:$("m-poster").value, type:$("type").value, category:$("category").value})});
    $("query").value = ""; $("m-title").value = ""; $("m-poster").value = "";
    setManual(false);
    render();
  };
  $("toggle").onclick = () => $("sidebar").classList.toggle("closed");

  $("export").onclick = () => { window.location = "/api/export"; };
  $("import").onclick = () => $("import-file").click();
  $("import-file").onchange = async (e) => {
    const f = e.target.files[0];
    if (!f) return;
    const fd = new FormData();
    fd.append("file", f);
    const r = await fetch("/api/import", {method:"POST", body:fd});
    if (!r.ok) alert("Invalid file format");
    e.target.value = "";
    render();
  };

  function paintScores() {
    $("e-scores").innerHTML = [1,2,3,4,5,6,7,8,9,10].map((n) => `<button data-s="${n}" class="${editScore===n?"on":""}">${n}</button>`).join("");
  }
  async function openEdit(id) {
    const data = await api(`/api/items/${encodeURIComponent(id)}`);
    editing = data.item;
    editScore = editing.score ?? null;
    $("e-title").value = editing.title || "";
    $("e-poster").value = editing.poster || "";
    $("e-notes").value = editing.notes || "";
    $("e-img").src = editing.poster || "";
    paintScores();
    $("modal").classList.add("open");
  }
  function closeEdit() { editing = null; $("modal").classList.remove("open"); render(); }
  async function commit(field, value) {
    if (!editing || editing[field] === value) return;
    if (field === "title" && !value.trim()) { $("e-title").value = editing.title; return; }
    const data = await api(`/api/items/${encodeURIComponent(editing.id)}`, {method:"PATCH", body:JSON.stringify({[field]:value})});
    editing = data.item;
    $("e-img").src = editing.poster || "";
  }
  $("e-title").addEventListener("blur", (e) => commit("title", e.target.value));
  $("e-poster").addEventListener("blur", (e) => commit("poster", e.target.value));
  $("e-notes").addEventListener("blur", (e) => commit("notes", e.target.value));
  $("e-scores").onclick = async (e) => {
    const b = e.target.closest("button[data-s]");
    if (!b || !editing) return;
    const n = +b.dataset.s;
    editScore = editScore === n ? null : n;
    paintScores();
    const data = await api(`/api/items/${encodeURIComponent(editing.id)}`, {method:"PATCH", body:JSON.stringify({score:editScore})});
    editing = data.item;
  };
  $("e-delete").onclick = async () => {
    if (!editing) return;
    await api(`/api/items/${encodeURIComponent(editing.id)}`, {method:"DELETE"});
    closeEdit();
  };
  $("close").onclick = closeEdit;
  $("modal").addEventListener("click", (e) => { if (e.target === $("modal")) closeEdit(); });

  api("/api/config").then((c) => { cfg = c; }).catch(() => {}).finally(render);
})();
</script>
</body></html>
"""
