"""
Basic usage - filter, order and paginate a table
"""
import asyncio
from pgrest import PostgrestClient, APIConfig


async def main():
    config = APIConfig(base_url="http://localhost:3000")
    
    async with PostgrestClient(config) as db:
        
        # First page of open todos, newest first
        todos = await (db.from_("todos")
                       .select("id, task, done")
                       .eq("done", False)
                       .order("id")
                       .range(0, 9)
                       .set_header("Prefer", "count=exact"))
        print(f"Showing {len(todos)} of {todos.full_length} open todos")
        for todo in todos:
            print(f"  {todo['id']}: {todo['task']}")
        
        # A single row as an object
        todo = await db.from_("todos").match({"id": 1}).single()
        print(f"\nTodo 1: {todo}")


if __name__ == "__main__":
    asyncio.run(main())
