"""Tunable constants for the cell graph."""

# Layer holding every cell that does not name a layer of its own
DEFAULT_LAYER_ID = "cells"

# Cell attribute naming the layer a cell lives in
LAYER_ATTRIBUTE = "layer"

# Where a link endpoint is parked when its cell goes away
DISCONNECTED_POINT = {"x": 0, "y": 0}

# Batch names
BATCH_ADD = "add"
BATCH_RESET = "reset"
BATCH_REMOVE = "remove"
BATCH_CLEAR = "clear"
BATCH_REPLACE_CELL = "replace-cell"
BATCH_SYNC_CELLS = "sync-cells"
BATCH_TRANSFER_EMBEDS = "transfer-embeds"
BATCH_TRANSFER_CONNECTED_LINKS = "transfer-connected-links"
BATCH_EMBED = "embed"
BATCH_UNEMBED = "unembed"
