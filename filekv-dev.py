# Development server for filekv using the in-memory storage backend
from filekv_lib.main import create_app
from filekv_lib.config import ServerConfig
app = create_app(ServerConfig(backend='inmem'))
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="127.0.0.1", port=8200)
