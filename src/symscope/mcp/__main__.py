from symscope.mcp.server import main

main()
