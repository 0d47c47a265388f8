"""
Sample data loader for the job description RAG system.

Submits a handful of job postings through the HTTP API. They are indexed
asynchronously by the ingestion workers.

Usage:
    python scripts/load_example_data.py [--base-url http://localhost:8000]

Requirements:
    - API server must be running
    - At least one ingestion worker must be running for postings to be indexed
"""

import argparse
from typing import Dict, Optional

import httpx

EXAMPLE_JOB_DESCRIPTIONS = [
    {
        "title": "Senior Data Engineer",
        "company": "Contoso",
        "location": "Seattle, WA",
        "workdayId": "JR-10231",
        "description": (
            "Design and operate batch and streaming pipelines on Spark and Kafka. "
            "Own data quality checks and work with analysts on warehouse modelling. "
            "5+ years of Python or Scala experience required."
        ),
    },
    {
        "title": "Machine Learning Engineer",
        "company": "Fabrikam",
        "location": "Remote",
        "description": (
            "Build and deploy ranking models for search. Experience with PyTorch, "
            "feature stores and online experimentation. Familiarity with vector "
            "databases is a plus."
        ),
    },
    {
        "title": "Backend Developer",
        "company": "Northwind Traders",
        "location": "London, UK",
        "workdayId": "NW-778",
        "description": (
            "Develop REST services in Python (FastAPI) backed by PostgreSQL and Redis. "
            "You will own service reliability, observability and on-call rotations."
        ),
    },
    {
        "title": "Site Reliability Engineer",
        "company": "Tailspin Toys",
        "location": "Austin, TX",
        "description": (
            "Run Kubernetes clusters across regions, automate infrastructure with "
            "Terraform and improve incident response. Strong Linux and networking skills."
        ),
    },
]


def make_api_request(
        endpoint: str,
        method: str = "GET",
        data: Optional[Dict] = None,
        base_url: str = "http://localhost:8000",
) -> Optional[httpx.Response]:
    """Make a request to the API."""
    url = f"{base_url}{endpoint}"

    try:
        with httpx.Client(timeout=30.0) as client:
            if method == "GET":
                return client.get(url)
            if method == "POST":
                return client.post(url, json=data)
            print(f"Unsupported method: {method}")
            return None
    except httpx.HTTPError as e:
        print(f"API request error: {str(e)}")
        return None


def load_job_descriptions(base_url: str) -> None:
    print("Loading job descriptions...")

    for i, example in enumerate(EXAMPLE_JOB_DESCRIPTIONS):
        print(f"Submitting {i + 1}/{len(EXAMPLE_JOB_DESCRIPTIONS)}: {example['title']} at {example['company']}")

        response = make_api_request(
            endpoint="/jobdescription",
            method="POST",
            data=example,
            base_url=base_url,
        )

        if response is not None and response.status_code == 202:
            result = response.json()
            print(f"Accepted: {result['id']}")
        else:
            print(f"Error: {response.text if response is not None else 'No response'}")


def main():
    parser = argparse.ArgumentParser(description="Load sample job descriptions")
    parser.add_argument("--base-url", default="http://localhost:8000", help="Base URL for the API")
    args = parser.parse_args()

    response = make_api_request(endpoint="/hello", base_url=args.base_url)
    if response is None or response.status_code != 200:
        print(f"API is not available at {args.base_url}")
        return

    print(f"API is available at {args.base_url}")
    load_job_descriptions(args.base_url)
    print("Sample data loading complete!")


if __name__ == "__main__":
    main()
