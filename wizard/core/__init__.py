"""
Core of wizard: compose-like workflow over the Docker Engine API.

Every invocation builds one ProjectContext from the working directory:
    project name  -> last path segment
    project hash  -> truncated sha256 of the absolute path
    containers    -> {project}-{service}-{hash}
    network       -> {project}-default

"up" sequence:
    - parse docker-compose.yaml / docker-compose.yml
    - ensure project network
    - for each service in document order
      -> running: skip
      -> stopped: start
      -> absent: pull or build image, create container, start
    - detached -> return
    - foreground -> multiplex started containers' output into the terminal

All engine calls are described in engine_interface.
"""
