"""
azstore - Blob Storage Example

Creates a container, uploads a few blobs, lists them and cleans up.

Configuration is read from azstore.yaml (if present) and AZSTORE_* environment
variables. To run against a local emulator:

    export AZSTORE_ACCOUNT=devstoreaccount1
    export AZSTORE_BLOB_ENDPOINT=http://127.0.0.1:10000/devstoreaccount1

Authentication is left to the transport: pass an ``httpx.AsyncClient`` with
an auth hook to ``HttpxTransport`` when talking to a real account.

Usage:
    python examples/blob_example.py
"""

import asyncio
import hashlib
import os

from azstore import Client, ConfigManager, PublicAccess, configure_logging

CONTAINER = "emulcont"


async def main():
    config_file = "azstore.yaml" if os.path.exists("azstore.yaml") else None
    config = ConfigManager().load(config_file=config_file)
    configure_logging(config.logging)

    async with Client.from_config(config) as client:
        print("\n=== Container ===\n")
        created = await (
            client.create_container()
            .with_container_name(CONTAINER)
            .with_public_access(PublicAccess.NONE)
            .finalize()
        )
        print(f"✓ Created '{CONTAINER}' (etag {created.e_tag})")

        print("\n=== Upload ===\n")
        data = b"something"
        # Optional, but lets the service reject corrupted uploads
        digest = hashlib.md5(data).digest()
        for index in range(3):
            await (
                client.put_block_blob()
                .with_container_name(CONTAINER)
                .with_blob_name(f"blob{index}.txt")
                .with_content_type("text/plain")
                .with_body(data)
                .with_content_md5(digest)
                .finalize()
            )
            print(f"✓ Uploaded blob{index}.txt")

        print("\n=== Listing ===\n")
        marker = None
        while True:
            builder = client.list_blobs().with_container_name(CONTAINER).with_max_results(2)
            if marker:
                builder = builder.with_next_marker(marker)
            page = await builder.finalize()
            for blob in page.incomplete_vector:
                print(f"  {blob.name}  {blob.content_length} bytes  {blob.last_modified}")
            marker = page.next_marker
            if not marker:
                break

        await client.delete_container().with_container_name(CONTAINER).finalize()
        print(f"\n✓ Deleted '{CONTAINER}'")


if __name__ == "__main__":
    asyncio.run(main())
