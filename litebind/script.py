from .errors import ScriptSyntaxError
from .statement import encode_sql, run

def execute_script(connection, sql):
    """Execute every statement of ``sql`` in order.

    Statement boundaries are found by the engine itself. Returns one result
    per statement (None for statements without rows); whitespace or comments
    after the last statement contribute nothing. The first failure aborts
    the script and nothing collected so far is returned.
    """
    buffer = encode_sql(sql)
    size = len(buffer) - 1
    results = []
    offset = 0
    while offset < size:
        statement, result = run(
            connection, buffer, offset,
            prepare_error=ScriptSyntaxError, error_extra={"offset": offset},
        )
        if statement.compiled:
            results.append(result)
        if statement.tail <= offset:
            break
        offset = statement.tail
    return results
