"""FRI oracle layouts and query-round evaluation."""