"""
Define schemas to validate requests to /people.
https://json-schema.org/understanding-json-schema/

Only the shape of the request is checked here.  Field content rules live in
app/person/person_validation.py so their messages can be reported per field.
"""

nullable_string = {"type": ["string", "null"]}

person_fields = {
    "first_name": nullable_string,
    "middle_name": nullable_string,
    "last_name": nullable_string,
    "ssn": nullable_string,
    "street_address_1": nullable_string,
    "street_address_2": nullable_string,
    "city": nullable_string,
    "state": nullable_string,
    "zip_code": nullable_string,
}

post_person_request_schema = {
    "$schema": "http://json-schema.org/draft/2020-12/schema",
    "type": "object",
    "properties": person_fields,
    "additionalProperties": False,
}

patch_person_request_schema = {
    "$schema": "http://json-schema.org/draft/2020-12/schema",
    "type": "object",
    "properties": person_fields,
    "additionalProperties": False,
    "minProperties": 1,
}
