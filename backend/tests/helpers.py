def add_block(client, headers, document_id, block_type, content=None, prefix="reports"):
    body = {"type": block_type}
    if content is not None:
        body["content"] = content
    return client.post(f"/api/v1/{prefix}/{document_id}/blocks", json=body, headers=headers)
