# Users API test suite
