"""TCP accept loop and the handler interface."""