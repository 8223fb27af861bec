"""
Callback style - then() and catch() instead of plain await
"""
import asyncio
from pgrest import RequestBuilder


async def main():
    builder = (RequestBuilder("GET", "http://localhost:3000/todos")
               .in_("id", [1, 2, 3])
               .select("id, task"))
    
    print("Request:", builder.prepare().url)
    
    tasks = await builder.then(
        lambda rows: [row["task"] for row in rows],
        lambda error: f"request failed: {error}",
    )
    print(tasks)
    
    # Each then()/catch()/await sends its own request
    print(await builder.catch(lambda error: []))


if __name__ == "__main__":
    asyncio.run(main())
