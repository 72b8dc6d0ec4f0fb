#
# rankfns
#
# Copyright (c) 2023-2026 Cognica, Inc.
#

"""rankfns -- index-free ranking kernels for information retrieval."""

from importlib.metadata import version as _metadata_version

from rankfns.errors import DomainError, InvalidParameter, RankingError
from rankfns.params import BM25Params
from rankfns.normalization import length_norm, length_ratio
from rankfns.bm25 import (
    bm25_idf,
    bm25_idf_plus1,
    bm25_score,
    bm25_tf,
    bm25_tf_upper_bound,
)
from rankfns.tfidf import IdfVariant, TfVariant, idf_transform, tf_transform, tfidf
from rankfns.smoothing import (
    Dirichlet,
    JelinekMercer,
    collection_probability,
    dirichlet,
    jelinek_mercer,
    lm_smoothed_p,
)
from rankfns.retriever import (
    BM25Retriever,
    Corpus,
    CorpusStats,
    DocumentStats,
    InMemoryCorpus,
    QueryLikelihoodRetriever,
    QueryStats,
    Retriever,
    TermStats,
    TfIdfRetriever,
    top_k,
)
from rankfns.explain import BM25Explanation, explain_bm25, format_explanation

__version__ = _metadata_version("rankfns")

__all__ = [
    "__version__",
    "BM25Explanation",
    "BM25Params",
    "BM25Retriever",
    "Corpus",
    "CorpusStats",
    "Dirichlet",
    "DocumentStats",
    "DomainError",
    "IdfVariant",
    "InMemoryCorpus",
    "InvalidParameter",
    "JelinekMercer",
    "QueryLikelihoodRetriever",
    "QueryStats",
    "RankingError",
    "Retriever",
    "TermStats",
    "TfIdfRetriever",
    "TfVariant",
    "bm25_idf",
    "bm25_idf_plus1",
    "bm25_score",
    "bm25_tf",
    "bm25_tf_upper_bound",
    "collection_probability",
    "dirichlet",
    "explain_bm25",
    "format_explanation",
    "idf_transform",
    "jelinek_mercer",
    "length_norm",
    "length_ratio",
    "lm_smoothed_p",
    "tf_transform",
    "tfidf",
    "top_k",
]
