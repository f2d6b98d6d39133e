from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import streamlit as st

# --- Rutas ---
ROOT = Path(__file__).resolve().parents[1]
TOOLS = ROOT / "tools"
if str(TOOLS) not in sys.path:
    sys.path.insert(0, str(TOOLS))

from analysis_core import analyze_internal

# -----------------------------
# Estilos y estado base
# -----------------------------
st.set_page_config(page_title="Lox Playground", layout="wide")

st.markdown(
    """
    <style>
      :root {
        --bg:#0f172a; --panel:#111827; --muted:#1f2937;
        --acc:#22c55e; --acc2:#06b6d4; --warn:#f59e0b; --err:#ef4444;
        --txt:#e5e7eb; --sub:#9ca3af;
      }
      .title {
        padding:8px 14px; border-radius:10px;
        background: linear-gradient(90deg, var(--acc), var(--acc2));
        color:#0b1220; font-weight:800; display:inline-block; letter-spacing:.3px;
      }
      .ok   { background: rgba(34,197,94,.15); border-left:4px solid var(--acc); padding:10px; border-radius:8px; }
      .err  { background: rgba(239,68,68,.15); border-left:4px solid var(--err);  padding:10px; border-radius:8px; }
      .metric-box {
        background:linear-gradient(180deg, rgba(31,41,55,.6), rgba(17,24,39,.6));
        border:1px solid var(--muted); border-radius:12px; padding:12px; text-align:center;
      }
      .metric-val { font-size:22px; font-weight:800; color:var(--txt); }
      .metric-lbl { font-size:12px; color:var(--sub); letter-spacing:.3px; }
    </style>
    """,
    unsafe_allow_html=True,
)

st.markdown('<div class="title">Lox Playground</div>', unsafe_allow_html=True)
st.caption("Scanner, parser, resolver e intérprete de Lox — salida, diagnósticos, AST y tabla de resolución")

# -----------------------------
# Sidebar: ejemplos y toggles
# -----------------------------
examples_dir = ROOT / "examples"
example_files: List[str] = []
if examples_dir.exists():
    for p in sorted(examples_dir.iterdir()):
        if p.is_file() and p.suffix == ".lox":
            example_files.append(p.name)

st.sidebar.subheader("Archivos de ejemplo")
sel_example = st.sidebar.selectbox("Abrir ejemplo:", ["(ninguno)"] + example_files, index=0)

show_ast = st.sidebar.checkbox("Mostrar AST (Graphviz)", value=True)
show_locals = st.sidebar.checkbox("Mostrar tabla de resolución", value=True)
show_globals = st.sidebar.checkbox("Mostrar globales", value=True)
show_tokens = st.sidebar.checkbox("Mostrar tokens", value=False)
hide_natives = st.sidebar.checkbox("Ocultar funciones nativas", value=True)

# -----------------------------
# Estado editor
# -----------------------------
DEFAULT_CODE = """class Counter {
  init() { this.n = 0; }
  inc() { this.n = this.n + 1; return this.n; }
}
var c = Counter();
c.inc();
print c.inc();
"""

if "code" not in st.session_state:
    st.session_state.code = DEFAULT_CODE
if "last_example" not in st.session_state:
    st.session_state.last_example = "(ninguno)"

if sel_example != "(ninguno)" and sel_example != st.session_state.last_example:
    st.session_state.code = (examples_dir / sel_example).read_text(encoding="utf-8")
    st.session_state.last_example = sel_example

st.session_state.code = st.text_area("Código Lox", value=st.session_state.code, height=320)
run_click = st.button("Ejecutar")

# -----------------------------
# Análisis y ejecución
# -----------------------------
result: Optional[Dict[str, Any]] = None
if run_click:
    result = analyze_internal(
        st.session_state.code,
        include_ast=show_ast,
        include_tokens=show_tokens,
        execute=True,
        hide_natives=hide_natives,
    )

if result is not None:
    static_errors = result.get("staticErrors", []) or []
    runtime_errors = result.get("runtimeErrors", []) or []
    locals_rows = result.get("locals", []) or []
    globals_rows = result.get("globals", []) or []

    m1, m2, m3, m4 = st.columns(4)
    for col, val, lbl in (
        (m1, len(static_errors), "Estáticos"),
        (m2, len(runtime_errors), "Ejecución"),
        (m3, len(locals_rows), "Referencias locales"),
        (m4, len(globals_rows), "Globales"),
    ):
        with col:
            st.markdown(
                '<div class="metric-box"><div class="metric-val">%d</div><div class="metric-lbl">%s</div></div>'
                % (val, lbl),
                unsafe_allow_html=True,
            )

    tabs_labels = ["Salida", "Diagnósticos"]
    if show_ast:
        tabs_labels.append("AST")
    if show_locals:
        tabs_labels.append("Resolución")
    if show_globals:
        tabs_labels.append("Globales")
    if show_tokens:
        tabs_labels.append("Tokens")
    tabs = st.tabs(tabs_labels)

    t = 0
    with tabs[t]:
        st.subheader("Salida del programa")
        st.code(result.get("output", "") or "", language="text")
    t += 1

    with tabs[t]:
        st.subheader("Errores estáticos")
        if len(static_errors) == 0:
            st.markdown('<div class="ok">Sin errores léxicos, sintácticos ni de resolución.</div>', unsafe_allow_html=True)
        else:
            st.code("\n".join(static_errors), language="text")
        st.subheader("Error de ejecución")
        if len(runtime_errors) == 0:
            st.markdown('<div class="ok">Sin errores de ejecución.</div>', unsafe_allow_html=True)
        else:
            st.markdown('<div class="err">' + "<br>".join(runtime_errors) + "</div>", unsafe_allow_html=True)
    t += 1

    if show_ast:
        with tabs[t]:
            st.subheader("Árbol sintáctico (AST)")
            dot = result.get("astDot")
            if dot:
                st.graphviz_chart(dot)
                st.code(result.get("astText", "") or "", language="lisp")
                st.download_button("Descargar DOT", data=dot, file_name="ast.dot", mime="text/vnd.graphviz")
            else:
                st.info("AST no disponible (hay errores estáticos).")
        t += 1

    if show_locals:
        with tabs[t]:
            st.subheader("Distancias de resolución")
            st.dataframe(locals_rows, use_container_width=True)
        t += 1

    if show_globals:
        with tabs[t]:
            st.subheader("Entorno global tras ejecutar")
            st.dataframe(globals_rows, use_container_width=True)
        t += 1

    if show_tokens:
        with tabs[t]:
            st.subheader("Tokens (depuración)")
            st.json(result.get("tokens", []) or [])

st.caption("Lox Playground • Streamlit UI")
