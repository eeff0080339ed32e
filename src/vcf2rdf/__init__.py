"""
VCF2RDF

Converts genomic variant records (Variant Call Format) into RDF statements.
Records are streamed from a tabix-indexed VCF, resolved to subjects, located
on their reference sequence with the FALDO vocabulary and serialized as
N-Triples, one statement group per alternate allele.
"""

__version__ = "1.0.0"
__author__ = "VCF2RDF"
