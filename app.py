import streamlit as st
import pandas as pd
import numpy as np
import plotly.express as px

from wordtrie import config as CFG
from wordtrie.compressed_trie import CompressedTrie
from wordtrie.errors import PreconditionViolation
from wordtrie_bench.bench import node_depths, run_benchmark
from wordtrie_bench.workload import WorkLoad

CFG.configure_logging()

# Configure page
st.set_page_config(
    page_title="Word Trie Explorer",
    page_icon="🌳",
    layout="wide",
    initial_sidebar_state="expanded"
)

SAMPLE_WORDS = "bear\nbull\nstock\nbell"

# Main title
st.title("🌳 Compressed Word Trie Explorer")
st.markdown("---")

# Sidebar
with st.sidebar:
    st.header("Navigation")
    page = st.selectbox(
        "Choose a section:",
        ["Build & Query", "Tree View", "Benchmark"]
    )

    st.markdown("---")
    st.subheader("Quick Actions")
    if st.button("🗑️ Clear Trie"):
        st.session_state.pop('trie', None)
        st.rerun()


def _parse_words(text):
    return [w.strip() for w in text.splitlines() if w.strip()]


def _completion_frame(trie, nodes):
    return pd.DataFrame({
        'Word': [trie.word_of(n) for n in nodes],
        'Word Index': [n.word_index for n in nodes],
        'Node Range': [str(n.substr) for n in nodes],
        'Label': [trie.words.text(n.substr) for n in nodes],
        'Leaf': [n.is_leaf for n in nodes],
    })


if page == "Build & Query":
    st.header("🔨 Build & Query")

    source = st.radio("Word source", ["Type words", "Generate workload"], horizontal=True)

    if source == "Type words":
        text = st.text_area("One lowercase word per line", value=SAMPLE_WORDS, height=180)
        words = _parse_words(text)
    else:
        col1, col2, col3 = st.columns(3)
        with col1:
            num_words = st.number_input("Words", min_value=1, max_value=200_000, value=1_000, step=100)
        with col2:
            p_freq = st.slider("Prefix frequency", min_value=0.0, max_value=0.95, value=0.3)
        with col3:
            seed = st.number_input("Seed", min_value=0, value=CFG.DEFAULT_SEED)
        words = WorkLoad(int(seed)).words(int(num_words), p_freq=p_freq)

    if st.button("Build Trie"):
        try:
            st.session_state['trie'] = CompressedTrie.build(words)
            st.success(f"✅ Built trie from {len(words)} words")
        except PreconditionViolation as e:
            st.error(f"❌ Cannot build trie: {e}")

    if 'trie' in st.session_state:
        trie = st.session_state['trie']

        col1, col2, col3, col4 = st.columns(4)
        with col1:
            st.metric("Input Words", len(trie.words))
        with col2:
            st.metric("Distinct", len(trie), f"{trie.duplicates} duplicates")
        with col3:
            st.metric("Nodes", trie.count_nodes())
        with col4:
            st.metric("Avg Branching", f"{trie.count_nodes(get_avg_branch_factor=True):.2f}")

        st.subheader("Completions")
        prefix = st.text_input("Prefix", value="b")
        limit = st.number_input("Max results (0 = all)", min_value=0, value=0)
        nodes = list(trie.iter_completions(prefix, k=int(limit) or None))

        if nodes:
            st.write(f"**{len(nodes)} completion(s) for '{prefix}':**")
            st.dataframe(_completion_frame(trie, nodes), use_container_width=True)
        else:
            st.info(f"No stored word starts with '{prefix}'")
    else:
        st.info("👆 Build a trie to start querying")

elif page == "Tree View":
    st.header("🌲 Tree View")

    if 'trie' in st.session_state:
        trie = st.session_state['trie']

        tab1, tab2 = st.tabs(["Rendered Tree", "Depth Distribution"])

        with tab1:
            if trie.count_nodes() > 2_000:
                st.warning("⚠️ Large trie: the dump may be slow to display")
            st.code(trie.render(), language=None)

        with tab2:
            depths = node_depths(trie)
            if depths.size:
                st.write(f"**Mean depth:** {np.mean(depths):.2f}  |  **Max depth:** {int(np.max(depths))}")
                fig = px.histogram(x=depths, nbins=int(np.max(depths)), title="Word Node Depths")
                fig.update_layout(xaxis_title="Depth (nodes below root)", yaxis_title="Words")
                st.plotly_chart(fig, use_container_width=True)
    else:
        st.info("📁 Please build a trie in the 'Build & Query' section first")

elif page == "Benchmark":
    st.header("⏱️ Benchmark")

    col1, col2, col3 = st.columns(3)
    with col1:
        sizes = st.multiselect("Sizes", [500, 1_000, 5_000, 10_000, 25_000, 50_000],
                               default=list(CFG.BENCH_SIZES))
    with col2:
        p_freq = st.slider("Prefix frequency", min_value=0.0, max_value=0.95, value=0.0, key="bench_pfreq")
    with col3:
        repeats = st.number_input("Repeats", min_value=1, max_value=10, value=CFG.BENCH_REPEATS)

    if st.button("▶️ Run Benchmark") and sizes:
        with st.spinner("Benchmarking..."):
            st.session_state['bench'] = run_benchmark(sorted(sizes), p_freq=p_freq, repeats=int(repeats))

    if 'bench' in st.session_state:
        df = st.session_state['bench']
        st.dataframe(df, use_container_width=True)

        long_df = df.melt(id_vars="n_words", value_vars=["build_s", "query_s"],
                          var_name="Phase", value_name="Seconds")
        fig = px.line(long_df, x="n_words", y="Seconds", color="Phase", markers=True,
                      title="Build and Query Time by Workload Size")
        st.plotly_chart(fig, use_container_width=True)

        fig_nodes = px.bar(df, x="n_words", y="nodes", title="Node Count by Workload Size")
        st.plotly_chart(fig_nodes, use_container_width=True)

# Footer
st.markdown("---")
st.markdown(
    """
    <div style='text-align: center; color: #B0B0B0; padding: 1rem;'>
        Built with Streamlit 🚀 | Compressed Word Trie Explorer
    </div>
    """,
    unsafe_allow_html=True
)
