"""Shared test fixtures for ednaseq tests."""

import pytest


@pytest.fixture
def fasta_content():
    """Two-record FASTA with a wrapped sequence and a descriptive header."""
    return ">s1 Salmo trutta COI\nATCG\nATCG\n>s2\nGGCC\n"


@pytest.fixture
def fastq_content():
    """Two complete FASTQ reads."""
    return (
        "@read1 lane=1\n"
        "ATCGATCGAT\n"
        "+\n"
        "IIIIIIIIII\n"
        "@read2\n"
        "GCGCGCGCGC\n"
        "+\n"
        "##########\n"
    )


@pytest.fixture
def plain_content():
    return "ATCGATCGAT\n\n  GGCC  \nXXXXATCG\n"
