#
# rankfns
#
# Copyright (c) 2023-2026 Cognica, Inc.
#

"""Scenario: rank a small in-memory corpus with three retrievers.

Builds per-document statistics from tokenised text, ranks with BM25,
TF-IDF and query likelihood, and explains the top BM25 hit.
"""

from rankfns import (
    BM25Retriever,
    Dirichlet,
    InMemoryCorpus,
    QueryLikelihoodRetriever,
    TfIdfRetriever,
    explain_bm25,
    format_explanation,
)

corpus_texts = [
    "Python is a popular programming language for data science",
    "Machine learning algorithms learn patterns from data",
    "Deep learning is a subset of machine learning using neural networks",
    "Natural language processing helps computers understand human language",
    "Python libraries like scikit-learn make machine learning accessible",
    "Data visualization tools help explore and present data effectively",
    "Neural networks are inspired by the structure of the human brain",
    "Supervised learning requires labeled training data",
    "Unsupervised learning discovers hidden patterns without labels",
    "Transfer learning reuses pretrained models for new tasks",
]

# Simple whitespace tokenization (in practice, use a proper tokenizer)
corpus = InMemoryCorpus.from_tokens([text.lower().split() for text in corpus_texts])
print(f"Indexed {len(corpus)} documents")
print(f"Average document length: {corpus.stats.avg_doc_len:.1f} tokens")

query_text = "machine learning python"
query = corpus.query(query_text.split())

retrievers = {
    "BM25": BM25Retriever(k1=1.2, b=0.75, k=3),
    "TF-IDF": TfIdfRetriever(k=3),
    "Query likelihood": QueryLikelihoodRetriever(Dirichlet(mu=100.0), k=3),
}

for name, retriever in retrievers.items():
    print(f"\n{name} -- '{query_text}'")
    for rank, (doc_id, score) in enumerate(retriever.rank(query, corpus), 1):
        print(f"  {rank:>2}  {score:8.4f}  {corpus_texts[doc_id][:50]}...")

bm25 = retrievers["BM25"]
best_id, _ = bm25.rank(query, corpus)[0]
best_doc = next(d for d in corpus.documents() if d.doc_id == best_id)
print()
print(format_explanation(explain_bm25(query, best_doc, corpus.stats, bm25.params)))
