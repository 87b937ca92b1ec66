"""OpenStack Identity API client and helpers, with a block storage service check."""