"""
Basic compressapi example

Serves JSON, plain text and a server-sent event stream behind the compression
middleware. Run it with `compressapi server run`.
"""
import asyncio
import json

from fastapi.responses import PlainTextResponse, StreamingResponse

from compressapi import create_app

app = create_app(compress_stream=True)


@app.get("/")
async def root():
    return {"message": "compressapi example", "routes": ["/items", "/lorem", "/events"]}


@app.get("/items")
async def list_items():
    return [{"id": i, "name": f"item-{i}", "description": "A compressible JSON record"} for i in range(200)]


@app.get("/lorem", response_class=PlainTextResponse)
async def lorem():
    return "Lorem ipsum dolor sit amet, consectetur adipiscing elit. " * 100


@app.get("/events")
async def events():
    async def event_source():
        for tick in range(10):
            yield f"data: {json.dumps({'tick': tick})}\n\n"
            await asyncio.sleep(0.5)

    return StreamingResponse(event_source(), media_type="text/event-stream")
