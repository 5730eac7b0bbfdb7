#!/usr/bin/env python3
"""
Example: Processing an eDNA upload with ednaseq

This example walks through the ingestion path of an uploaded file:
- Detecting the file format
- Parsing and scoring sequences
- Storing rows for the uploaded file
- Validating a (canned) taxonomic classification
"""

import json
import sys
sys.path.insert(0, '..')

from ednaseq.io import detect_format, parse_sequence_file
from ednaseq.ingest import InMemorySequenceStore, UploadRequest, process_file_upload
from ednaseq.stats import summarize_records
from ednaseq.taxonomy import InMemoryAnalysisStore, analyze_sequences

UPLOAD = """>river_site_A_001 12S rRNA
ATCGATCGATGGCCTAGCTAGGCTAACG
>river_site_A_002 12S rRNA
ATATATATATATATTTAAAT
>river_site_A_003
GCNNATXXGCGCATCG
"""


def canned_classifier(prompt):
    """Stand-in for the external classification service."""
    return json.dumps({
        "taxa": [
            {
                "kingdom": "Animalia",
                "phylum": "Chordata",
                "class": "Actinopterygii",
                "order": "Salmoniformes",
                "family": "Salmonidae",
                "genus": "Salmo",
                "species": "Salmo trutta",
                "confidence": 0.91,
                "is_novel": False,
                "sequence_count": 2,
            }
        ],
        "summary": {"total_taxa": 1, "novel_species": 0, "average_confidence": 0.91},
    })


def demo_parsing():
    print("\n" + "=" * 60)
    print("PARSING")
    print("=" * 60)

    print(f"\nDetected format: {detect_format(UPLOAD).value}")
    for record in parse_sequence_file(UPLOAD):
        print(f"  {record.header:<30} {record.length:>4} bp  score {record.quality_score:6.2f}")

    summary = summarize_records(parse_sequence_file(UPLOAD))
    print(f"\nMean quality: {summary.mean_quality:.2f}")
    print(f"High quality: {summary.high_quality_count}/{summary.count}")


def demo_upload():
    print("\n" + "=" * 60)
    print("UPLOAD PROCESSING")
    print("=" * 60)

    store = InMemorySequenceStore()
    request = UploadRequest.from_dict({
        "fileId": "file-001",
        "content": UPLOAD,
        "projectId": "river-survey",
    })
    result = process_file_upload(request, store)
    print(f"\nStored {result.sequences_count} sequences")

    analysis_store = InMemoryAnalysisStore()
    analysis = analyze_sequences(request.project_id, result.sequences,
                                 canned_classifier, analysis_store)
    print(f"Project status: {analysis_store.project_status[request.project_id]}")
    for taxon in analysis_store.taxa:
        print(f"  {taxon['species']} (confidence {taxon['confidence_score']:.0%}, "
              f"{taxon['sequence_count']} seqs)")
    print(f"Taxa identified: {analysis.taxa_count}")


def main():
    print("=" * 60)
    print("ednaseq Upload Demo")
    print("=" * 60)

    demo_parsing()
    demo_upload()

    print("\n" + "=" * 60)
    print("Demo Complete!")
    print("=" * 60)


if __name__ == "__main__":
    main()
