#
# rankfns
#
# Copyright (c) 2023-2026 Cognica, Inc.
#

"""Scenario: BM25, TF-IDF and language-model scores on a tiny corpus.

Works directly with the scalar kernels: the caller supplies corpus
statistics and gets back a number.
"""

from rankfns import (
    Dirichlet,
    IdfVariant,
    JelinekMercer,
    TfVariant,
    bm25_idf_plus1,
    bm25_tf,
    idf_transform,
    lm_smoothed_p,
    tf_transform,
)

# Corpus: 5 documents, average length 10 tokens.
n_docs = 5
avg_doc_len = 10.0

# Term "rust" appears in 2 docs; term "the" appears in all 5.
df_rust = 2
df_the = 5

print("=== BM25 IDF  ln(1 + (N - df + 0.5) / (df + 0.5)) ===")
print(f"  'rust' (df={df_rust}): {bm25_idf_plus1(n_docs, df_rust):.4f}")
print(f"  'the'  (df={df_the}): {bm25_idf_plus1(n_docs, df_the):.4f}")

k1, b = 1.2, 0.75
print(f"\n=== BM25 TF (k1={k1}, b={b}) ===")
for tf, doc_len in [(3.0, 12.0), (1.0, 8.0), (0.0, 10.0)]:
    score = bm25_tf(tf, doc_len, avg_doc_len, k1, b)
    print(f"  tf={tf:.0f}, doc_len={doc_len:.0f} => {score:.4f}")

print("\n=== Full BM25 score (IDF * TF) ===")
idf = bm25_idf_plus1(n_docs, df_rust)
tf_score = bm25_tf(3.0, 12.0, avg_doc_len, k1, b)
print(f"  'rust' in doc (tf=3, len=12): {idf * tf_score:.4f}")

print("\n=== TF-IDF variants ===")
tf_raw = tf_transform(3, TfVariant.RAW)
tf_log = tf_transform(3, TfVariant.LOG)
idf_std = idf_transform(n_docs, df_rust, IdfVariant.STANDARD)
idf_smooth = idf_transform(n_docs, df_rust, IdfVariant.SMOOTHED)
print(f"  Raw TF(3)={tf_raw:.2f}, Log TF(3)={tf_log:.4f}")
print(f"  Standard IDF={idf_std:.4f}, Smoothed IDF={idf_smooth:.4f}")
print(f"  TF-IDF (raw, standard): {tf_raw * idf_std:.4f}")

print("\n=== Language model P(t|D) ===")
p_corpus = 0.01  # collection probability of "rust"
p_jm = lm_smoothed_p(3.0, 12.0, p_corpus, JelinekMercer(lam=0.3))
p_dir = lm_smoothed_p(3.0, 12.0, p_corpus, Dirichlet(mu=1000.0))
print(f"  Jelinek-Mercer (lambda=0.3): {p_jm:.4f}")
print(f"  Dirichlet      (mu=1000):    {p_dir:.4f}")
