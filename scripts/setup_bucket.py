#!/usr/bin/env python3
"""
Create and configure the GCS bucket that holds photos, purchase photos and
the metadata documents.

This script:
1. Creates the configured bucket if it does not exist
2. Optionally grants public read access so stored asset URLs load in a browser
3. Configures CORS for GET/HEAD from the portal

Usage:
    python scripts/setup_bucket.py
    python scripts/setup_bucket.py --public-read

Note: public read applies to the whole bucket, including metadata/*.json.
"""

import argparse
import sys

from google.cloud import storage

from brandgallery.settings import settings


def setup_bucket(storage_client, bucket_name: str, public_read: bool, location: str):
    print(f"\n=== Setting up bucket {bucket_name} ===")

    try:
        bucket = storage_client.get_bucket(bucket_name)
        print(f"✓ Bucket {bucket_name} already exists")
    except Exception:
        print(f"Creating bucket {bucket_name}...")
        bucket = storage_client.create_bucket(bucket_name, location=location)
        print(f"✓ Created bucket {bucket_name}")

    if public_read:
        print("Configuring public read access...")
        policy = bucket.get_iam_policy(requested_policy_version=3)
        has_public_access = any(
            binding["role"] == "roles/storage.objectViewer" and "allUsers" in binding["members"]
            for binding in policy.bindings
        )
        if not has_public_access:
            policy.bindings.append({
                "role": "roles/storage.objectViewer",
                "members": {"allUsers"}
            })
            bucket.set_iam_policy(policy)
            print(f"✓ Configured public read access for {bucket_name}")
        else:
            print(f"✓ Public read access already configured for {bucket_name}")

    print("Configuring CORS...")
    bucket.cors = [
        {
            "origin": [settings.app_url],
            "method": ["GET", "HEAD"],
            "responseHeader": ["Content-Type"],
            "maxAgeSeconds": 3600
        }
    ]
    bucket.patch()
    print(f"✓ Configured CORS for {bucket_name}")

    print(f"\n✓ Bucket {bucket_name} is ready!")
    print(f"  Public URL: {settings.storage_root}{{storage_key}}")
    return bucket


def main():
    parser = argparse.ArgumentParser(description="Setup the Brand Gallery storage bucket")
    parser.add_argument("--bucket", default=settings.storage_bucket_name, help="Bucket name")
    parser.add_argument("--location", default="US", help="Bucket location for new buckets")
    parser.add_argument("--public-read", action="store_true", help="Grant allUsers object read access")
    args = parser.parse_args()

    print("=== Brand Gallery Bucket Setup ===")
    print(f"Project: {settings.gcp_project_id or '(default credentials project)'}")

    confirm = input("Continue? (yes/no): ")
    if confirm.lower() != 'yes':
        print("Aborted.")
        return False

    storage_client = storage.Client(project=settings.gcp_project_id) if settings.gcp_project_id else storage.Client()
    try:
        setup_bucket(storage_client, args.bucket, args.public_read, args.location)
    except Exception as e:
        print(f"\n✗ Failed to setup bucket: {e}")
        return False
    return True


if __name__ == "__main__":
    success = main()
    sys.exit(0 if success else 1)
